from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from openai import OpenAIError

from app.core.config import settings
from app.core.exceptions import DescriptionGenerationError
from app.services.description_generator import SYSTEM_PROMPT, DescriptionGenerator, build_prompt


@pytest.fixture
def vehicle():
    return SimpleNamespace(
        type="Truck",
        brand="Ford",
        model="F-150",
        color="Red",
        engine_size="3.5L V6",
        year=2023,
        price=Decimal("42650.00"),
    )


def completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def test_prompt_lists_vehicle_details(vehicle):
    prompt = build_prompt(vehicle)

    assert "- Type: Truck" in prompt
    assert "- Brand: Ford" in prompt
    assert "- Model: F-150" in prompt
    assert "- Engine Size: 3.5L V6" in prompt
    assert "- Year: 2023" in prompt
    assert "- Price: $42,650.00" in prompt
    assert "100-200 words" in prompt


def test_generate_sends_single_chat_completion(vehicle):
    openai_client = MagicMock()
    openai_client.chat.completions.create.return_value = completion("  Built Ford tough.  ")

    description = DescriptionGenerator(client=openai_client).generate(vehicle)

    assert description == "Built Ford tough."
    openai_client.chat.completions.create.assert_called_once()
    kwargs = openai_client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == settings.OPENAI_MODEL
    assert kwargs["temperature"] == 0.8
    assert kwargs["max_tokens"] == 300
    assert kwargs["messages"][0] == {"role": "system", "content": SYSTEM_PROMPT}
    assert kwargs["messages"][1]["role"] == "user"


@pytest.mark.parametrize("content", [None, "", "   "])
def test_empty_answer_is_an_error(vehicle, content):
    openai_client = MagicMock()
    openai_client.chat.completions.create.return_value = completion(content)

    with pytest.raises(DescriptionGenerationError, match="Empty response"):
        DescriptionGenerator(client=openai_client).generate(vehicle)


def test_no_choices_is_an_error(vehicle):
    openai_client = MagicMock()
    openai_client.chat.completions.create.return_value = SimpleNamespace(choices=[])

    with pytest.raises(DescriptionGenerationError):
        DescriptionGenerator(client=openai_client).generate(vehicle)


def test_api_error_is_wrapped(vehicle):
    openai_client = MagicMock()
    openai_client.chat.completions.create.side_effect = OpenAIError("quota exceeded")

    with pytest.raises(DescriptionGenerationError, match="quota exceeded"):
        DescriptionGenerator(client=openai_client).generate(vehicle)


def test_missing_api_key_fails_at_call_time(vehicle, monkeypatch):
    monkeypatch.setattr(settings, "OPENAI_API_KEY", "")

    generator = DescriptionGenerator()

    with pytest.raises(DescriptionGenerationError, match="OPENAI_API_KEY"):
        generator.generate(vehicle)


def test_client_is_built_without_sdk_retries(monkeypatch):
    monkeypatch.setattr(settings, "OPENAI_API_KEY", "sk-test")
    openai_cls = MagicMock()
    monkeypatch.setattr("app.services.description_generator.OpenAI", openai_cls)

    generator = DescriptionGenerator()

    assert generator.client is openai_cls.return_value
    openai_cls.assert_called_once_with(api_key="sk-test", max_retries=0)
