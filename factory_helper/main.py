"""Generate factory_boy factories for the models of a SQLAlchemy project."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from factory_helper import __version__
from factory_helper.config import Settings, get_settings
from factory_helper.database import get_engine
from factory_helper.exceptions import PersistenceError
from factory_helper.logging_config import setup_logging
from factory_helper.services import (
    FactoryGenerator,
    SchemaInferenceEngine,
    SchemaIntrospector,
    TypeRegistry,
    discover,
)

logger = logging.getLogger(__name__)


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="factory-helper",
        description="Generate test factories for models",
    )
    parser.add_argument(
        "model",
        nargs="*",
        help="Which models to include (dotted names, comma-separated allowed)",
    )
    parser.add_argument(
        "-F",
        "--filename",
        default=settings.factories_path,
        help=f"The path to the model factory file (default: {settings.factories_path})",
    )
    parser.add_argument(
        "-D",
        "--dir",
        action="append",
        default=None,
        help=f"The model dir, repeatable (default: {', '.join(settings.model_dirs)})",
    )
    parser.add_argument(
        "-R",
        "--reset",
        action="store_true",
        help="Remove the original factories module instead of appending",
    )
    parser.add_argument(
        "-I",
        "--ignore",
        default="",
        help="Which models to ignore (comma-separated)",
    )
    parser.add_argument(
        "--database-url",
        default=None,
        help="Database to reflect tables from (default: settings)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Report skipped and loaded models (-vv for debug output)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def read_document(path: Path) -> str:
    """Current factories module, or an empty string if there is none yet."""
    try:
        return path.read_text(encoding="utf-8")
    except (FileNotFoundError, NotADirectoryError):
        return ""


def write_document(path: Path, content: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise PersistenceError(str(path), exc.strerror or str(exc)) from exc


def _log_level(verbosity: int, settings: Settings) -> str:
    if verbosity >= 2:
        return "DEBUG"
    if verbosity == 1:
        return "INFO"
    return settings.log_level


def main(argv: list[str] | None = None, settings: Settings | None = None) -> int:
    settings = settings or get_settings()
    args = build_parser(settings).parse_args(argv)
    setup_logging(_log_level(args.verbose, settings))

    root = Path(settings.project_root).resolve()
    # Host models are imported by dotted name from the project root
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))

    filename = Path(args.filename)
    if not filename.is_absolute():
        filename = root / filename

    models = discover(args.model, args.dir or settings.model_dirs, root)
    logger.debug("Discovered %d candidate models", len(models))

    engine = get_engine(args.database_url or settings.database_url)
    try:
        generator = FactoryGenerator(
            TypeRegistry(settings.model_base),
            SchemaInferenceEngine(SchemaIntrospector(engine, settings.table_prefix), settings),
        )
        result = generator.generate(
            models,
            ignore=args.ignore,
            existing_document=read_document(filename),
            reset=args.reset,
        )
    finally:
        engine.dispose()

    try:
        write_document(filename, result)
    except PersistenceError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    print(f"Model factories were written successfully to {filename}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
