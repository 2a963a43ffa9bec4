import sys
import textwrap
from dataclasses import dataclass
from pathlib import Path

import pytest

from repository_generator.config import Settings
from repository_generator.tests.util.logs import reset_logging
from repository_generator.tests.util.random_strings import random_package_name

POST_MODEL_SOURCE = textwrap.dedent(
    """
    from sqlalchemy import Integer, String
    from sqlalchemy.orm import DeclarativeBase, mapped_column


    class Base(DeclarativeBase):
        pass


    class Post(Base):
        __tablename__ = "posts"

        id = mapped_column(Integer, primary_key=True, autoincrement=True)
        title = mapped_column(String(200), nullable=False)
    """
)

# Lives in its own module and is not re-exported by the models package
TAG_MODEL_SOURCE = textwrap.dedent(
    """
    from sqlalchemy import Integer, String
    from sqlalchemy.orm import mapped_column

    from .post import Base


    class Tag(Base):
        __tablename__ = "tags"

        id = mapped_column(Integer, primary_key=True, autoincrement=True)
        label = mapped_column(String(50), nullable=False)
    """
)


@pytest.fixture(autouse=True)
def clean_logging():
    # main() binds its log handler to the current (captured) stderr
    yield
    reset_logging()


@dataclass
class HostApp:
    namespace: str
    path: Path
    settings: Settings


@pytest.fixture
def host_app(tmp_path, monkeypatch) -> HostApp:
    """
    A throwaway application package on sys.path with a models package:

        <tmp>/<namespace>/__init__.py
        <tmp>/<namespace>/models/__init__.py   (re-exports Post)
        <tmp>/<namespace>/models/post.py
        <tmp>/<namespace>/models/tag.py
    """
    namespace = random_package_name()
    app_path = tmp_path / namespace
    models_path = app_path / "models"
    models_path.mkdir(parents=True)
    (app_path / "__init__.py").touch()
    (models_path / "__init__.py").write_text("from .post import Base, Post\n")
    (models_path / "post.py").write_text(POST_MODEL_SOURCE)
    (models_path / "tag.py").write_text(TAG_MODEL_SOURCE)

    monkeypatch.setattr(sys, "path", list(sys.path))
    monkeypatch.syspath_prepend(str(tmp_path))

    yield HostApp(
        namespace=namespace,
        path=app_path,
        settings=Settings(BASE_APPLICATION_NAMESPACE=namespace),
    )

    for name in list(sys.modules):
        if name == namespace or name.startswith(namespace + "."):
            del sys.modules[name]
