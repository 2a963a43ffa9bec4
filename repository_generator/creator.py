"""
Repository Creator - writes a repository and its contract for a model.

Class names, dotted namespaces and file locations are all derived from the
model name and the generator settings:

    Post -> app.repositories.posts_repository.PostsRepository
         -> app.repositories.contracts.posts_repository_contract.PostsRepositoryContract

Nothing is written until the model has been found and neither generated class
exists yet. The two files are then written one after the other, without
any rollback if the second write fails.
"""

import importlib
import inspect
from pathlib import Path
from typing import List, Optional, Tuple, Union

from structlog import get_logger

from repository_generator import stubs
from repository_generator.config import Settings, get_settings
from repository_generator.exceptions import (
    ContractAlreadyExistsError,
    ModelNotFoundError,
    RepositoryAlreadyExistsError,
)
from repository_generator.naming import pluralize, snake_case, studly

logger = get_logger()

PathLike = Union[str, Path]


def class_exists(module_name: str, class_name: str) -> bool:
    """True if ``module_name`` can be imported and defines the class ``class_name``."""
    try:
        module = importlib.import_module(module_name)
    except ModuleNotFoundError as e:
        # Only a missing target module means "no such class". A missing
        # dependency of an existing module is a real error.
        if e.name is not None and not (
            module_name == e.name or module_name.startswith(e.name + ".")
        ):
            raise
        return False
    return inspect.isclass(getattr(module, class_name, None))


class RepositoryCreator:
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings if settings is not None else get_settings()

    def create(self, model: str, base_path: PathLike) -> Tuple[Path, Path]:
        """
        Generate the repository and repository contract for ``model``.

        ``base_path`` is the directory of the application package, the one
        BASE_APPLICATION_NAMESPACE refers to. Returns the paths of the
        repository and contract modules.

        Raises ModelNotFoundError, RepositoryAlreadyExistsError or
        ContractAlreadyExistsError before writing anything.
        """
        base_path = Path(base_path)
        logger.info("Generating repository", model=model, base_path=str(base_path))

        model_module = self.ensure_model_exists(model)
        self.ensure_repository_does_not_already_exist(model, base_path)
        self.ensure_contract_does_not_already_exist(model, base_path)

        repository_stub = self.get_repository_stub()
        contract_stub = self.get_contract_stub()
        replacements = self.get_replacements(model, model_module)

        repository_path = self.get_repository_path(model, base_path)
        self.write(repository_path, stubs.populate(repository_stub, replacements))

        contract_path = self.get_contract_path(model, base_path)
        self.write(contract_path, stubs.populate(contract_stub, replacements))

        return repository_path, contract_path

    def get_replacements(self, model: str, model_module: str) -> stubs.Replacements:
        repository_class = self.get_repository_class_name(model)
        return [
            (stubs.REPOSITORY_CLASS, repository_class),
            (stubs.REPOSITORY_INSTANCE, snake_case(repository_class)),
            (stubs.REPOSITORY_NAMESPACE, self.get_repository_base_namespace()),
            (stubs.CONTRACT_CLASS, self.get_contract_class_name(model)),
            (stubs.CONTRACT_MODULE, self.get_contract_module(model)),
            (stubs.CONTRACT_NAMESPACE, self.get_contract_base_namespace()),
            (stubs.MODEL_CLASS, self.get_class_name(model)),
            (stubs.MODEL_MODULE, model_module),
            (stubs.MODEL_NAMESPACE, self.get_model_namespace(model)),
        ]

    def get_repository_stub(self) -> str:
        return stubs.load_stub(stubs.REPOSITORY_STUB, self.settings.STUBS_PATH)

    def get_contract_stub(self) -> str:
        return stubs.load_stub(stubs.CONTRACT_STUB, self.settings.STUBS_PATH)

    def write(self, path: Path, content: str) -> None:
        leftover = stubs.remaining_tokens(content)
        if leftover:
            logger.warning(
                "Stub placeholders left unreplaced", path=str(path), tokens=leftover
            )
        path.write_text(content, encoding="utf-8")
        logger.info("Wrote module", path=str(path))

    # Precondition checks

    def ensure_model_exists(self, model: str) -> str:
        """Return the module defining the model class or raise ModelNotFoundError."""
        class_name = self.get_class_name(model)
        for module_name in self.get_model_module_candidates(model):
            if class_exists(module_name, class_name):
                logger.debug("Found model", module=module_name, model=class_name)
                return module_name
        raise ModelNotFoundError(self.get_model_namespace(model))

    def ensure_repository_does_not_already_exist(
        self, model: str, base_path: PathLike
    ) -> None:
        if self.get_repository_file(model, base_path).exists() or class_exists(
            self.get_repository_module(model), self.get_repository_class_name(model)
        ):
            raise RepositoryAlreadyExistsError(self.get_repository_namespace(model))

    def ensure_contract_does_not_already_exist(
        self, model: str, base_path: PathLike
    ) -> None:
        if self.get_contract_file(model, base_path).exists() or class_exists(
            self.get_contract_module(model), self.get_contract_class_name(model)
        ):
            raise ContractAlreadyExistsError(self.get_contract_namespace(model))

    # Class names

    def get_class_name(self, model: str) -> str:
        return studly(model)

    def get_class_prefix(self, model: str) -> str:
        class_name = self.get_class_name(model)
        return pluralize(class_name) if self.settings.PLURALISE else class_name

    def get_repository_class_name(self, model: str) -> str:
        return f"{self.get_class_prefix(model)}Repository"

    def get_contract_class_name(self, model: str) -> str:
        return f"{self.get_class_prefix(model)}RepositoryContract"

    # Dotted namespaces

    def get_model_base_namespace(self) -> str:
        return f"{self.settings.BASE_APPLICATION_NAMESPACE}.{self.settings.MODEL_BASE_NAMESPACE}"

    def get_model_namespace(self, model: str) -> str:
        return f"{self.get_model_base_namespace()}.{self.get_class_name(model)}"

    def get_model_module_candidates(self, model: str) -> List[str]:
        # Either re-exported by the models package or in its own module
        package = self.get_model_base_namespace()
        return [package, f"{package}.{snake_case(self.get_class_name(model))}"]

    def get_repository_base_namespace(self) -> str:
        return f"{self.settings.BASE_APPLICATION_NAMESPACE}.{self.settings.REPOSITORIES_BASE_NAMESPACE}"

    def get_repository_module(self, model: str) -> str:
        return f"{self.get_repository_base_namespace()}.{snake_case(self.get_repository_class_name(model))}"

    def get_repository_namespace(self, model: str) -> str:
        return f"{self.get_repository_module(model)}.{self.get_repository_class_name(model)}"

    def get_contract_base_namespace(self) -> str:
        return f"{self.settings.BASE_APPLICATION_NAMESPACE}.{self.settings.REPOSITORY_CONTRACT_BASE_NAMESPACE}"

    def get_contract_module(self, model: str) -> str:
        return f"{self.get_contract_base_namespace()}.{snake_case(self.get_contract_class_name(model))}"

    def get_contract_namespace(self, model: str) -> str:
        return f"{self.get_contract_module(model)}.{self.get_contract_class_name(model)}"

    # File locations

    def get_repository_file(self, model: str, base_path: PathLike) -> Path:
        filename = f"{snake_case(self.get_repository_class_name(model))}.py"
        return Path(base_path) / self.settings.REPOSITORIES_BASE_PATH / filename

    def get_contract_file(self, model: str, base_path: PathLike) -> Path:
        filename = f"{snake_case(self.get_contract_class_name(model))}.py"
        return Path(base_path) / self.settings.REPOSITORY_CONTRACT_BASE_PATH / filename

    def get_repository_path(self, model: str, base_path: PathLike) -> Path:
        """Location of the repository module, creating its package if needed."""
        path = self.get_repository_file(model, base_path)
        ensure_package(Path(base_path), path.parent)
        return path

    def get_contract_path(self, model: str, base_path: PathLike) -> Path:
        """Location of the contract module, creating its package if needed."""
        path = self.get_contract_file(model, base_path)
        ensure_package(Path(base_path), path.parent)
        return path


def ensure_package(base_path: Path, directory: Path) -> List[Path]:
    """
    Create ``directory`` below ``base_path``, adding an empty ``__init__.py``
    to every directory created so the generated modules can be imported.

    Directories that already exist are left as they are. Returns the created
    directories.
    """
    created = []
    current = base_path
    for part in directory.relative_to(base_path).parts:
        current = current / part
        if not current.exists():
            current.mkdir(parents=True)
            (current / "__init__.py").touch()
            created.append(current)
            logger.debug("Created package", path=str(current))
    return created
