"""Deserialize raw API bodies into response shapes."""

import logging
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ResponseParseError(ValueError):
    """Raised when a response body cannot be read as the requested shape."""

    def __init__(self, message: str, body: str | None, repository_name: str | None = None):
        super().__init__(message)
        self.body = body
        self.repository_name = repository_name


def parse(body: str | None, shape: type[T] | Any, repository_name: str | None = None) -> T:
    """Parse ``body`` as ``shape``, a model class or a generic such as ``list[Comment]``.

    Failures are logged with the repository and the raw body, then re-raised
    as ResponseParseError.
    """
    try:
        return TypeAdapter(shape).validate_json(body if body is not None else "")
    except ValidationError as e:
        logger.error(
            "Unable to parse the response.\nrepository: %s\nresponse: %s",
            repository_name,
            body,
        )
        raise ResponseParseError(
            f"Unable to parse the response as {shape!r}", body, repository_name
        ) from e
