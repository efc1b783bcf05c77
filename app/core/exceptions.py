"""
Exceptions raised by the external service adapters.

Callers decide whether a failure is fatal for the request.
"""


class UpstreamServiceError(Exception):
    """An external provider (S3, OpenAI) failed to complete a call."""


class StorageError(UpstreamServiceError):
    """Object storage upload or deletion failed."""


class DescriptionGenerationError(UpstreamServiceError):
    """The text generation provider returned an error or an empty answer."""
