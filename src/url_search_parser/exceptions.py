"""Exception hierarchy for url-search-parser.

All exceptions inherit from ``UrlSearchParserError`` and provide
``to_dict()`` for API-friendly error responses.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any


class UrlSearchParserError(Exception):
    """Root exception for the url-search-parser package."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class InvalidParamError(UrlSearchParserError):
    """Raised when a request parameter has an invalid value.

    Carries structured errors: ``{param: [messages]}``.
    """

    def __init__(self, param: str, message: str) -> None:
        self.param = param
        self.message = message
        self.errors: dict[str, list[str]] = {param: [message]}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INVALID_PARAM",
            "param": self.param,
            "message": self.message,
            "errors": self.errors,
        }


class UnsupportedTypeError(UrlSearchParserError, ValueError):
    """
    Unknown coercion type token.

    Provides fuzzy-matched suggestions for likely intended tokens.
    """

    def __init__(self, token: str, valid_tokens: list[str]) -> None:
        self.token = token
        self.valid_tokens = valid_tokens
        self.suggestions = get_close_matches(token, valid_tokens, n=3, cutoff=0.6)

        message = f"Unsupported type [{token}]."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "UNSUPPORTED_TYPE",
            "type": self.token,
            "suggestions": self.suggestions,
            "valid_types": sorted(self.valid_tokens),
        }


class CoercionError(UrlSearchParserError):
    """Raised when a value cannot be represented in the requested type."""

    def __init__(self, target: str, value: Any) -> None:
        self.target = target
        self.value = value
        super().__init__(f"Cannot set type [{target}] for value {value!r}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "COERCION_FAILED",
            "type": self.target,
            "message": str(self),
        }


class QueryHashError(UrlSearchParserError):
    """Raised when the query hash cannot be generated."""
