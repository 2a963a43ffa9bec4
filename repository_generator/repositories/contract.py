"""
Repository Contract - the capability set every generated repository offers.

Generated contracts subclass this for one model; any storage backend can
provide an implementation. SQLAlchemyRepository is the one shipped here.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, Literal, Optional, Sequence, TypeVar, Union

from sqlalchemy.orm import Session

from repository_generator.schemas.pagination import Page

ModelType = TypeVar("ModelType")

# Relationship names to eager load, dotted for nested loads ("comments.author")
EagerLoad = Sequence[str]


class RepositoryContract(ABC, Generic[ModelType]):
    """Repository interface shared by all generated repositories."""

    @abstractmethod
    def all(self, db: Session, with_: EagerLoad = ()) -> Optional[Sequence[ModelType]]:
        """Return every record, or None if the query failed."""
        pass

    @abstractmethod
    def find_by_id(
        self, db: Session, id: Any, with_: EagerLoad = (), fail: bool = True
    ) -> Union[ModelType, Sequence[ModelType], None]:
        """Get a record by primary key, or several records for a list of keys."""
        pass

    @abstractmethod
    def get_first_by(
        self,
        db: Session,
        key: str,
        value: Any,
        with_: EagerLoad = (),
        comparator: str = "=",
        fail: bool = False,
    ) -> Optional[ModelType]:
        """Get the first record whose ``key`` compares to ``value``."""
        pass

    @abstractmethod
    def get_by_page(
        self, db: Session, page: int = 1, page_size: int = 10, with_: EagerLoad = ()
    ) -> Page[ModelType]:
        """Get one page of records and the total record count."""
        pass

    @abstractmethod
    def create(self, db: Session, data: dict, commit: bool = True) -> ModelType:
        """Create a new record."""
        pass

    @abstractmethod
    def update(
        self, db: Session, db_obj: ModelType, data: dict, commit: bool = True
    ) -> Union[ModelType, Literal[False]]:
        """Update a record, returning it, or False if it was never saved."""
        pass

    @abstractmethod
    def delete(self, db: Session, db_obj: ModelType, commit: bool = True) -> bool:
        """Delete a record."""
        pass

    @abstractmethod
    def truncate(self, db: Session, commit: bool = True) -> None:
        """Remove every record."""
        pass
