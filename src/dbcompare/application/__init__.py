"""Application layer.

Exports:
    Runner:
        - ComparisonRunner: Runs illustrations and ad-hoc queries
        - QueryOutcome: One engine's answer to a transpiled query
        - EmptyQueryError: Raised for a query with no statement
    Book:
        - BookBuilder: Renders illustrations into markdown chapters
        - Chapter: A titled chapter of prose plus one illustration
    Illustrations:
        - ILLUSTRATIONS, get_illustration, IllustrationResult
"""

from dbcompare.application.book import DEFAULT_CHAPTERS, BookBuilder, Chapter
from dbcompare.application.illustrations import (
    ILLUSTRATIONS,
    IllustrationResult,
    UnknownIllustrationError,
    get_illustration,
)
from dbcompare.application.runner import ComparisonRunner, EmptyQueryError, QueryOutcome

__all__ = [
    "DEFAULT_CHAPTERS",
    "BookBuilder",
    "Chapter",
    "ComparisonRunner",
    "EmptyQueryError",
    "QueryOutcome",
    "ILLUSTRATIONS",
    "IllustrationResult",
    "UnknownIllustrationError",
    "get_illustration",
]
