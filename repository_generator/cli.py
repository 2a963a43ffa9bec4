from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path
from typing import Optional, Sequence

from structlog import get_logger

from repository_generator.config import Settings, get_settings
from repository_generator.creator import RepositoryCreator
from repository_generator.exceptions import GeneratorError
from repository_generator.logging import init_logging
from repository_generator.stubs import publish_stubs

logger = get_logger()


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="repository-generator",
        description="Generate repository classes for SQLAlchemy models",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    make = subparsers.add_parser(
        "make-repository", help="Create a new repository class and its contract"
    )
    make.add_argument("model", help="The name of the model")
    make.add_argument(
        "--base-path",
        default=None,
        help="Directory of the application package "
        "(default: ./<BASE_APPLICATION_NAMESPACE>)",
    )

    publish = subparsers.add_parser(
        "publish-stubs", help="Copy the default stubs somewhere they can be edited"
    )
    publish.add_argument("directory", help="Directory to write the stubs to")
    publish.add_argument(
        "--force", action="store_true", help="Overwrite stubs already published"
    )
    return parser.parse_args(argv)


def default_base_path(settings: Settings) -> Path:
    return Path.cwd().joinpath(*settings.BASE_APPLICATION_NAMESPACE.split("."))


def add_import_root(base_path: Path, settings: Settings) -> Path:
    """Put the directory holding the application package on sys.path."""
    depth = len(settings.BASE_APPLICATION_NAMESPACE.split("."))
    import_root = base_path.parents[depth - 1]
    if str(import_root) not in sys.path:
        sys.path.insert(0, str(import_root))
    return import_root


def make_repository(
    model: str, base_path: Optional[str], settings: Settings
) -> None:
    model = model.strip()
    path = Path(base_path) if base_path else default_base_path(settings)
    path = path.resolve()
    add_import_root(path, settings)

    creator = RepositoryCreator(settings)
    creator.create(model, path)

    print(f"Created Repository: {creator.get_repository_class_name(model)}")
    print(f"Created Repository Contract: {creator.get_contract_class_name(model)}")

    # New modules must be visible to the import system without a restart
    importlib.invalidate_caches()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    settings = get_settings()
    init_logging(settings)

    try:
        if args.command == "make-repository":
            make_repository(args.model, args.base_path, settings)
        elif args.command == "publish-stubs":
            for path in publish_stubs(args.directory, overwrite=args.force):
                print(f"Published stub: {path}")
    except GeneratorError as e:
        logger.debug("Generation failed", error=str(e))
        print(str(e), file=sys.stderr)
        return 1
    return 0
