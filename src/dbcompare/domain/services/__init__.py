"""Domain services."""

from dbcompare.domain.services.error_messages import (
    EngineMessage,
    parse_error_message,
    shorten,
)

__all__ = [
    "EngineMessage",
    "parse_error_message",
    "shorten",
]
