"""
Vehicle description generator backed by the OpenAI chat completions API.
"""

import logging
from typing import Optional

from openai import OpenAI, OpenAIError

from app.core.config import settings
from app.core.exceptions import DescriptionGenerationError

logger = logging.getLogger(__name__)


SYSTEM_PROMPT = (
    "You are a professional automotive sales copywriter. Create engaging and persuasive "
    "vehicle descriptions that highlight key features and benefits while maintaining "
    "honesty and professionalism."
)

USER_PROMPT_TEMPLATE = """Write an engaging and creative sales description for this vehicle:

Vehicle Details:
- Type: {type}
- Brand: {brand}
- Model: {model}
- Color: {color}
- Engine Size: {engine_size}
- Year: {year}
- Price: ${price:,.2f}

Please create a compelling sales description that:
1. Highlights the key features and benefits
2. Creates emotional appeal
3. Emphasizes value proposition
4. Is between 100-200 words
5. Uses persuasive but honest language
6. Mentions reliability, performance, and style where appropriate

Write in an enthusiastic but professional tone that would appeal to potential buyers."""


def build_prompt(vehicle) -> str:
    """Render the user prompt for a vehicle (ORM object or any object with the same attributes)"""
    return USER_PROMPT_TEMPLATE.format(
        type=vehicle.type,
        brand=vehicle.brand,
        model=vehicle.model,
        color=vehicle.color,
        engine_size=vehicle.engine_size,
        year=vehicle.year,
        price=float(vehicle.price),
    )


class DescriptionGenerator:
    """Generates sales copy for vehicles with a single chat completion call"""

    def __init__(self, client: Optional[OpenAI] = None):
        self._client = client

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            if not settings.OPENAI_API_KEY:
                raise DescriptionGenerationError("OPENAI_API_KEY is not configured")
            self._client = OpenAI(api_key=settings.OPENAI_API_KEY, max_retries=0)
            logger.info("OpenAI client initialized")
        return self._client

    def generate(self, vehicle) -> str:
        """
        Generate a sales description for a vehicle.

        Raises:
            DescriptionGenerationError: If the API call fails or returns no text
        """
        try:
            completion = self.client.chat.completions.create(
                model=settings.OPENAI_MODEL,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_prompt(vehicle)},
                ],
                max_tokens=settings.OPENAI_MAX_TOKENS,
                temperature=settings.OPENAI_TEMPERATURE,
            )
        except OpenAIError as e:
            logger.error(f"OpenAI API error: {str(e)}")
            raise DescriptionGenerationError(f"OpenAI API Error: {str(e)}") from e

        description = None
        if completion.choices:
            content = completion.choices[0].message.content
            description = content.strip() if content else None

        if not description:
            raise DescriptionGenerationError("Empty response from OpenAI API")

        return description


description_generator = DescriptionGenerator()


def get_description_generator() -> DescriptionGenerator:
    """FastAPI dependency returning the shared description generator"""
    return description_generator
