"""Book builder.

Turns illustrations into a small markdown book: an index page and one
chapter per topic, each made of narrative prose followed by the
illustration's result table. The output directory is what a static-site
generator is pointed at; generating and hosting the site is left to it.

Layout of the output directory:
    index.md        title, author, engine versions, table of contents
    01-<slug>.md    one file per chapter, numbered in reading order
    toc.json        [{"file": ..., "title": ...}, ...]
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from dbcompare.application.illustrations import IllustrationResult
from dbcompare.application.runner import ComparisonRunner
from dbcompare.infrastructure.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Chapter:
    """A chapter: prose, optionally followed by one illustration."""

    slug: str
    title: str
    prose: str
    illustration: str | None = None

    def filename(self, number: int) -> str:
        return f"{number:02d}-{self.slug}.md"


DEFAULT_CHAPTERS: tuple[Chapter, ...] = (
    Chapter(
        slug="introduction",
        title="Introduction",
        prose=(
            "SQLite and DuckDB are both embedded SQL engines: a library linked into the "
            "program, a single database file or an in-memory database, no server. They "
            "make very different trade-offs. SQLite is a general-purpose transactional "
            "store. DuckDB is built for analytical queries.\n\n"
            "Every chapter runs the same short script against both engines through one "
            "generic database interface. It connects, creates a table, appends rows and "
            "reads them back. Only the engine changes."
        ),
    ),
    Chapter(
        slug="storage",
        title="Row and column storage",
        prose=(
            "SQLite stores each record contiguously. Writing or fetching one whole "
            "record is cheap. DuckDB stores each column contiguously and compresses it. "
            "Scanning one column over many records is cheap, and so is aggregating it.\n\n"
            "The table below times a bulk write, a full read, an aggregate over one "
            "column and a single-record lookup on identical data."
        ),
        illustration="storage",
    ),
    Chapter(
        slug="types",
        title="Supported data types",
        prose=(
            "SQLite has five storage classes: NULL, INTEGER, REAL, TEXT and BLOB. A "
            "declared column type only sets an affinity, and SQLite accepts any type "
            "name, even one that does not exist. DuckDB has a rich set of types and "
            "refuses type names it does not know.\n\n"
            "For each type, a one-column table is created and a conforming value is "
            "written and read back."
        ),
        illustration="types",
    ),
    Chapter(
        slug="enforcement",
        title="Type enforcement",
        prose=(
            "A value that does not fit the declared type tells the two engines apart. "
            "SQLite keeps the value and stores it under whatever storage class fits. "
            "DuckDB casts it at write time and raises an error when the cast fails. "
            "SQLite's STRICT tables bring enforcement to SQLite, but only for a handful "
            "of type names.\n\n"
            "Each row below inserts one deliberately invalid value. The error message is "
            "shown as the engine reported it, without its category prefix."
        ),
        illustration="enforcement",
    ),
    Chapter(
        slug="blobs",
        title="Geometry and blob round-tripping",
        prose=(
            "Neither engine needs a spatial extension to keep geometries. Well-known "
            "binary fits in a BLOB column and well-known text fits in a text column. "
            "What matters is that the bytes come back unchanged.\n\n"
            "Each geometry is written in both forms next to raw random bytes and then "
            "compared with the original after reading it back."
        ),
        illustration="blobs",
    ),
)


class BookBuilder:
    """Renders chapters and their illustrations into a markdown directory."""

    def __init__(
        self,
        runner: ComparisonRunner,
        chapters: Sequence[Chapter] = DEFAULT_CHAPTERS,
        output_dir: Path | None = None,
    ) -> None:
        self._runner = runner
        self._chapters = tuple(chapters)
        self._output_dir = Path(output_dir) if output_dir is not None else runner.config.book.output_dir
        slugs = [chapter.slug for chapter in self._chapters]
        if len(set(slugs)) != len(slugs):
            raise ValueError("chapter slugs must be unique")

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    @staticmethod
    def render_chapter(chapter: Chapter, result: IllustrationResult | None = None) -> str:
        """Markdown for one chapter."""
        parts = [f"# {chapter.title}", "", chapter.prose.strip(), ""]
        if result is not None:
            parts += [result.to_markdown(), ""]
            if result.notes:
                parts += [f"- {note}" for note in result.notes]
                parts.append("")
        return "\n".join(parts)

    def render_index(self, versions: dict[str, str], files: list[tuple[str, str]]) -> str:
        book = self._runner.config.book
        parts = [f"# {book.title}", "", f"*{book.author}*", "", "## Engines", ""]
        parts += ["| engine | version |", "| --- | --- |"]
        parts += [f"| {engine} | {version} |" for engine, version in versions.items()]
        parts += ["", "## Contents", ""]
        parts += [f"1. [{title}]({filename})" for filename, title in files]
        parts.append("")
        return "\n".join(parts)

    def build(self) -> list[Path]:
        """Run every chapter's illustration and write the book. Returns written paths."""
        self._output_dir.mkdir(parents=True, exist_ok=True)
        written: list[Path] = []
        files: list[tuple[str, str]] = []

        for number, chapter in enumerate(self._chapters, start=1):
            result = self._runner.run_one(chapter.illustration) if chapter.illustration else None
            filename = chapter.filename(number)
            path = self._output_dir / filename
            path.write_text(self.render_chapter(chapter, result), encoding="utf-8")
            written.append(path)
            files.append((filename, chapter.title))
            logger.info("chapter_written", chapter=chapter.slug, path=str(path))

        index = self._output_dir / "index.md"
        index.write_text(self.render_index(self._runner.engine_versions(), files), encoding="utf-8")
        toc = self._output_dir / "toc.json"
        toc.write_text(
            json.dumps([{"file": f, "title": t} for f, t in files], indent=2) + "\n",
            encoding="utf-8",
        )
        written = [index, *written, toc]
        logger.info("book_written", output_dir=str(self._output_dir), chapters=len(files))
        return written
