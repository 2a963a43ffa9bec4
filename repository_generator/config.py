import enum
from functools import lru_cache
from typing import Optional

from pydantic import DirectoryPath, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Dotted package of the host application, e.g. "app" or "myproject.app"
    BASE_APPLICATION_NAMESPACE: str = "app"

    # Package (relative to the application namespace) holding the models
    MODEL_BASE_NAMESPACE: str = "models"

    # Where generated repositories are written, relative to the application directory,
    # and the package they are importable from
    REPOSITORIES_BASE_PATH: str = "repositories"
    REPOSITORIES_BASE_NAMESPACE: str = "repositories"

    REPOSITORY_CONTRACT_BASE_PATH: str = "repositories/contracts"
    REPOSITORY_CONTRACT_BASE_NAMESPACE: str = "repositories.contracts"

    # "Post" -> "PostsRepository" when enabled, "PostRepository" otherwise
    PLURALISE: bool = True

    # Directory of published stubs. Falls back to the packaged stubs per file.
    STUBS_PATH: Optional[DirectoryPath] = None

    class LoggingLevel(str, enum.Enum):
        DEBUG = "DEBUG"
        INFO = "INFO"
        WARNING = "WARNING"

    LOGGING_LEVEL: LoggingLevel = LoggingLevel.INFO
    LOG_AS_JSON: bool = False

    @field_validator(
        "BASE_APPLICATION_NAMESPACE",
        "MODEL_BASE_NAMESPACE",
        "REPOSITORIES_BASE_NAMESPACE",
        "REPOSITORY_CONTRACT_BASE_NAMESPACE",
        mode="before",
    )
    @classmethod
    def validate_namespace(cls, v: str) -> str:
        if isinstance(v, str):
            v = v.strip().strip(".")
            if v and all(part.isidentifier() for part in v.split(".")):
                return v
        raise ValueError(f"{v!r} is not a dotted Python module path")

    @field_validator(
        "REPOSITORIES_BASE_PATH", "REPOSITORY_CONTRACT_BASE_PATH", mode="before"
    )
    @classmethod
    def strip_path_separators(cls, v: str) -> str:
        if isinstance(v, str):
            return v.strip().strip("/\\")
        return v

    model_config = SettingsConfigDict(
        case_sensitive=True,
        use_enum_values=True,
        env_prefix="REPOSITORY_GENERATOR_",
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
