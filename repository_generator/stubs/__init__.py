"""
Stub templates for generated modules, and the populator that fills them in.

A stub is plain text holding ``{{ name }}`` placeholder tokens. Populating a
stub is a single pass of literal replacements, one per ``(token, value)`` pair;
there is no escaping, nesting or looping.
"""

import re
import shutil
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from structlog import get_logger

logger = get_logger()

REPOSITORY_STUB = "repository.stub"
CONTRACT_STUB = "contract.stub"

MODEL_CLASS = "{{ model_class }}"
MODEL_MODULE = "{{ model_module }}"
MODEL_NAMESPACE = "{{ model_namespace }}"
REPOSITORY_CLASS = "{{ repository_class }}"
REPOSITORY_INSTANCE = "{{ repository_instance }}"
REPOSITORY_NAMESPACE = "{{ repository_namespace }}"
CONTRACT_CLASS = "{{ contract_class }}"
CONTRACT_MODULE = "{{ contract_module }}"
CONTRACT_NAMESPACE = "{{ contract_namespace }}"

TOKEN_PATTERN = re.compile(r"\{\{\s*\w+\s*\}\}")

Replacements = Sequence[Tuple[str, str]]


def default_stubs_path() -> Path:
    return Path(__file__).resolve().parent


def stub_path(name: str, stubs_path: Optional[Union[str, Path]] = None) -> Path:
    """Published stub if the custom directory has one, otherwise the packaged stub."""
    if stubs_path is not None:
        custom = Path(stubs_path) / name
        if custom.is_file():
            return custom
        logger.debug("No published stub, using packaged default", stub=name)
    return default_stubs_path() / name


def load_stub(name: str, stubs_path: Optional[Union[str, Path]] = None) -> str:
    path = stub_path(name, stubs_path)
    logger.debug("Loading stub", path=str(path))
    return path.read_text(encoding="utf-8")


def populate(stub: str, replacements: Replacements) -> str:
    """Replace every occurrence of each token with its value, in order."""
    for token, value in replacements:
        stub = stub.replace(token, value)
    return stub


def remaining_tokens(text: str) -> List[str]:
    """Placeholder tokens that survived population, e.g. typos in a custom stub."""
    return TOKEN_PATTERN.findall(text)


def publish_stubs(
    target: Union[str, Path],
    overwrite: bool = False,
    names: Iterable[str] = (REPOSITORY_STUB, CONTRACT_STUB),
) -> List[Path]:
    """
    Copy the packaged stubs into ``target`` so they can be customised.

    Point ``REPOSITORY_GENERATOR_STUBS_PATH`` at the directory to use them.
    Returns the paths that were written; existing files are left alone unless
    ``overwrite`` is set.
    """
    target = Path(target)
    target.mkdir(parents=True, exist_ok=True)

    written = []
    for name in names:
        destination = target / name
        if destination.exists() and not overwrite:
            logger.info("Stub already published, skipping", path=str(destination))
            continue
        shutil.copyfile(default_stubs_path() / name, destination)
        written.append(destination)
    return written
