"""Command line interface.

    dbcompare engines                      engine names and versions
    dbcompare run [NAME ...]               print illustration tables as markdown
    dbcompare build [--output DIR]         write the markdown book
    dbcompare query SQL [--read DIALECT]   run one query on every engine

Configuration comes from DBCOMPARE_* environment variables; the global
options below override it for one invocation.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence, TextIO

from pydantic import ValidationError
from sqlglot.errors import SqlglotError

from dbcompare import __version__
from dbcompare.adapters.outbound import UnknownEngineError
from dbcompare.application import (
    ILLUSTRATIONS,
    BookBuilder,
    ComparisonRunner,
    EmptyQueryError,
    IllustrationResult,
    QueryOutcome,
    UnknownIllustrationError,
)
from dbcompare.infrastructure.config import BenchmarkConfig, BookConfig, Config, EngineConfig
from dbcompare.infrastructure.logging import get_logger, setup_logging
from dbcompare.infrastructure.metrics import setup_metrics
from dbcompare.infrastructure.tracing import setup_tracing
from dbcompare.ports.outbound import EngineError

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dbcompare",
        description="Compare SQLite and DuckDB side by side.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    parser.add_argument("--log-format", choices=["json", "console"])
    parser.add_argument("--engines", help="Comma-separated engines to compare (default: sqlite,duckdb)")
    parser.add_argument("--database-dir", type=Path, help="Keep databases in files under this directory")
    parser.add_argument("--no-strict", action="store_true", help="Skip SQLite STRICT tables")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("engines", help="List engines and their versions")

    run = sub.add_parser("run", help="Run illustrations and print their tables")
    run.add_argument("names", nargs="*", metavar="NAME", help=f"One of: {', '.join(ILLUSTRATIONS)}")
    run.add_argument("--rows", type=int, help="Rows in the timed table")
    run.add_argument("--repeats", type=int, help="Timed repetitions per operation")

    build = sub.add_parser("build", help="Write the markdown book")
    build.add_argument("--output", type=Path, help="Output directory")
    build.add_argument("--rows", type=int, help="Rows in the timed table")
    build.add_argument("--repeats", type=int, help="Timed repetitions per operation")

    query = sub.add_parser("query", help="Run one query on every engine")
    query.add_argument("sql", help="The query")
    query.add_argument("--read", default="duckdb", help="sqlglot dialect the query is written in")

    return parser


def load_config(args: argparse.Namespace) -> Config:
    """Environment configuration with command line overrides applied."""
    config = Config()

    engine = config.engine.model_dump()
    if args.engines:
        engine["engines"] = [name for name in args.engines.split(",") if name.strip()]
    if args.database_dir is not None:
        engine["database_dir"] = args.database_dir
    if args.no_strict:
        engine["sqlite_strict"] = False

    benchmark = config.benchmark.model_dump()
    for key in ("rows", "repeats"):
        value = getattr(args, key, None)
        if value is not None:
            benchmark[key] = value

    book = config.book.model_dump()
    if getattr(args, "output", None) is not None:
        book["output_dir"] = args.output

    observability = config.observability.model_dump()
    if args.log_level:
        observability["log_level"] = args.log_level
    if args.log_format:
        observability["log_format"] = args.log_format

    return Config(
        engine=EngineConfig(**engine),
        benchmark=BenchmarkConfig(**benchmark),
        book=BookConfig(**book),
        observability=observability,
    )


def print_result(result: IllustrationResult, out: TextIO) -> None:
    out.write(f"## {result.title}\n\n{result.to_markdown()}\n\n")
    for note in result.notes:
        out.write(f"- {note}\n")
    out.write("\n")


def print_outcome(outcome: QueryOutcome, out: TextIO) -> None:
    out.write(f"## {outcome.engine}\n\n```sql\n{outcome.sql}\n```\n\n")
    if outcome.error is not None:
        kind = f" ({outcome.error.kind})" if outcome.error.kind else ""
        out.write(f"error{kind}: {outcome.error.text}\n\n")
    elif outcome.result is not None and outcome.result.columns:
        out.write(f"{outcome.result.to_frame().to_markdown(index=False)}\n\n")
    else:
        affected = outcome.result.affected_rows if outcome.result is not None else 0
        out.write(f"ok, {affected} rows affected\n\n")


def main(argv: Sequence[str] | None = None, out: TextIO | None = None) -> int:
    out = out or sys.stdout
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args)
    except ValidationError as e:
        sys.stderr.write(f"dbcompare: invalid configuration: {e}\n")
        return 1

    obs = config.observability
    setup_logging(level=obs.log_level, log_format=obs.log_format)
    if obs.otel_endpoint:
        setup_tracing(obs.otel_service_name, obs.otel_endpoint)
    metrics = setup_metrics(obs.metrics_port) if obs.metrics_port else None

    runner = ComparisonRunner(config, metrics)
    try:
        if args.command == "engines":
            for engine, version in runner.engine_versions().items():
                out.write(f"{engine}\t{version}\n")
        elif args.command == "run":
            for result in runner.run(args.names or None):
                print_result(result, out)
        elif args.command == "build":
            paths = BookBuilder(runner).build()
            for path in paths:
                out.write(f"{path}\n")
        elif args.command == "query":
            outcomes = runner.compare_query(args.sql, read=args.read)
            for outcome in outcomes:
                print_outcome(outcome, out)
            if not all(outcome.success for outcome in outcomes):
                return 1
    except (
        EngineError,
        EmptyQueryError,
        UnknownEngineError,
        UnknownIllustrationError,
        SqlglotError,
    ) as e:
        logger.error("command_failed", command=args.command, error=str(e))
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
