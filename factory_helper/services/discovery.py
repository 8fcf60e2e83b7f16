"""Model discovery: explicit names or a scan of source directories."""

import ast
import logging
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)


class DirectoryScanner:
    """Map class definitions under a directory to their source files.

    Files are parsed, never imported, so scanning has no side effects on
    the host project.
    """

    def __init__(self, root: str | Path):
        self.root = Path(root).resolve()

    def module_name(self, path: Path) -> str:
        """Dotted module name of ``path`` relative to the project root."""
        parts = list(path.resolve().relative_to(self.root).with_suffix("").parts)
        if parts and parts[-1] == "__init__":
            parts.pop()
        return ".".join(parts)

    def scan(self, path: str | Path) -> dict[str, Path]:
        directory = Path(path)
        found: dict[str, Path] = {}
        for source in sorted(directory.rglob("*.py")):
            try:
                tree = ast.parse(source.read_text(encoding="utf-8"), filename=str(source))
            except (OSError, UnicodeDecodeError, SyntaxError) as exc:
                logger.debug("Skipping unreadable file %s: %s", source, exc)
                continue
            try:
                module = self.module_name(source)
            except ValueError:
                logger.debug("Skipping %s: outside project root %s", source, self.root)
                continue
            for node in tree.body:
                if isinstance(node, ast.ClassDef):
                    found[f"{module}.{node.name}" if module else node.name] = source
        return found


def split_model_names(entries: Iterable[str]) -> list[str]:
    """Flatten comma-separated model arguments, keeping order and duplicates."""
    models: list[str] = []
    for entry in entries:
        models.extend(entry.split(","))
    return models


def discover(
    explicit_models: Iterable[str],
    scan_dirs: Iterable[str],
    root: str | Path = ".",
) -> list[str]:
    """Candidate model names, from the explicit list or from scanning ``scan_dirs``."""
    explicit_models = list(explicit_models)
    if explicit_models:
        return split_model_names(explicit_models)

    scanner = DirectoryScanner(root)
    models: list[str] = []
    for directory in scan_dirs:
        path = scanner.root / directory
        if not path.exists():
            logger.debug("Model directory %s does not exist", path)
            continue
        models.extend(scanner.scan(path))
    return models
