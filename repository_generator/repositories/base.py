import operator
from typing import Any, Callable, Dict, Literal, Optional, Sequence, Type, Union

from sqlalchemy import Select, delete, func, inspect, select, tuple_
from sqlalchemy.exc import NoResultFound
from sqlalchemy.orm import Session, selectinload
from structlog import get_logger

from repository_generator.exceptions import InvalidModelTypeError
from repository_generator.repositories.contract import (
    EagerLoad,
    ModelType,
    RepositoryContract,
)
from repository_generator.schemas.pagination import Page

logger = get_logger()

COMPARATORS: Dict[str, Callable[[Any, Any], Any]] = {
    "=": operator.eq,
    "==": operator.eq,
    "!=": operator.ne,
    "<>": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
    "like": lambda column, value: column.like(value),
    "not like": lambda column, value: column.not_like(value),
    "ilike": lambda column, value: column.ilike(value),
    "in": lambda column, value: column.in_(value),
    "not in": lambda column, value: column.not_in(value),
}


class SQLAlchemyRepository(RepositoryContract[ModelType]):
    def __init__(self, model: Type[ModelType]):
        """
        Repository with the generic operations for one SQLAlchemy model.

        **Parameters**

        * `model`: A SQLAlchemy model class

        Every operation takes the session to run in as its first argument, so a
        single repository instance can be shared across sessions.
        """
        self.model = model

    @property
    def primary_key(self):
        return inspect(self.model).primary_key

    def eager_load_options(self, with_: Union[str, EagerLoad]) -> list:
        """Loader options for relationship names, e.g. ["author", "comments.author"]"""
        if isinstance(with_, str):
            with_ = [with_]

        options = []
        for path in with_:
            entity = self.model
            loader = None
            for name in path.split("."):
                mapper = inspect(entity)
                if name not in mapper.relationships:
                    raise ValueError(
                        f"{entity.__name__} has no relationship named {name!r}"
                    )
                attr = getattr(entity, name)
                loader = (
                    selectinload(attr) if loader is None else loader.selectinload(attr)
                )
                entity = mapper.relationships[name].mapper.class_
            options.append(loader)
        return options

    def get_all_query(self, with_: Union[str, EagerLoad] = ()) -> Select:
        """Select statement for all records, in primary key order.

        Apply filters to the returned statement before any pagination.
        """
        return (
            select(self.model)
            .options(*self.eager_load_options(with_))
            .order_by(*self.primary_key)
        )

    def all(
        self, db: Session, with_: Union[str, EagerLoad] = ()
    ) -> Optional[Sequence[ModelType]]:
        # Failures are logged and reported as None, not raised
        try:
            return db.scalars(self.get_all_query(with_)).all()
        except Exception as e:
            logger.debug(
                "Listing records failed", model=self.model.__name__, error=str(e)
            )
            return None

    def find_by_id(
        self,
        db: Session,
        id: Any,
        with_: Union[str, EagerLoad] = (),
        fail: bool = True,
    ) -> Union[ModelType, Sequence[ModelType], None]:
        """
        Get a record by primary key.

        A list (or set) of keys returns the matching records instead. With
        `fail` a missing record, or any missing key of a list, raises
        NoResultFound; otherwise None (or the records found) is returned.
        Tuples are treated as a single composite key.
        """
        if isinstance(id, (list, set, frozenset)):
            ids = list(id)
            pk_columns = self.primary_key
            if len(pk_columns) > 1:
                # Each id is a tuple of column values
                ids = [tuple(key) for key in ids]
                criterion = tuple_(*pk_columns).in_(ids)
            else:
                criterion = pk_columns[0].in_(ids)
            query = self.get_all_query(with_).where(criterion)
            found = db.scalars(query).all()
            if fail and len(found) != len(set(ids)):
                raise NoResultFound(
                    f"{self.model.__name__} records not found for ids {ids}"
                )
            return found

        db_obj = db.get(self.model, id, options=self.eager_load_options(with_))
        if db_obj is None and fail:
            raise NoResultFound(f"{self.model.__name__} with id {id} not found")
        return db_obj

    def get_first_by(
        self,
        db: Session,
        key: str,
        value: Any,
        with_: Union[str, EagerLoad] = (),
        comparator: str = "=",
        fail: bool = False,
    ) -> Optional[ModelType]:
        compare = COMPARATORS.get(comparator.strip().lower())
        if compare is None:
            raise ValueError(f"Unsupported comparator {comparator!r}")
        if key not in inspect(self.model).column_attrs:
            raise ValueError(f"{self.model.__name__} has no column named {key!r}")

        query = (
            self.get_all_query(with_)
            .where(compare(getattr(self.model, key), value))
            .limit(1)
        )
        result = db.scalars(query)
        return result.one() if fail else result.first()

    def get_by_page(
        self,
        db: Session,
        page: int = 1,
        page_size: int = 10,
        with_: Union[str, EagerLoad] = (),
    ) -> Page[ModelType]:
        """
        One page of records plus the row count of the whole table.

        The page and the count are two separate queries, so concurrent writes
        can make them disagree.
        """
        if page < 1:
            raise ValueError("page starts at 1")
        if page_size < 1:
            raise ValueError("page_size must be positive")

        query = self.get_all_query(with_).offset(page_size * (page - 1)).limit(page_size)
        items = db.scalars(query).all()
        total_count = db.scalar(select(func.count()).select_from(self.model))

        return Page(
            page=page,
            page_size=page_size,
            total_count=total_count or 0,
            items=list(items),
        )

    def create(self, db: Session, data: dict, commit: bool = True) -> ModelType:
        db_obj = self.model(**data)
        db.add(db_obj)
        if commit:
            db.commit()
            db.refresh(db_obj)
        else:
            db.flush()
        return db_obj

    def update(
        self, db: Session, db_obj: ModelType, data: dict, commit: bool = True
    ) -> Union[ModelType, Literal[False]]:
        self.ensure_model_type(db_obj)
        if inspect(db_obj).transient:
            return False

        for field, value in data.items():
            # Keys that aren't attributes of the model are ignored
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        db.add(db_obj)
        if commit:
            db.commit()
            db.refresh(db_obj)
        else:
            db.flush()
        return db_obj

    def delete(self, db: Session, db_obj: ModelType, commit: bool = True) -> bool:
        self.ensure_model_type(db_obj)
        if inspect(db_obj).transient:
            return False

        db.delete(db_obj)
        if commit:
            db.commit()
        else:
            db.flush()
        return True

    def truncate(self, db: Session, commit: bool = True) -> None:
        # A DELETE rather than TRUNCATE TABLE, which SQLite lacks
        db.execute(delete(self.model))
        if commit:
            db.commit()
        else:
            db.flush()

    def ensure_model_type(self, db_obj: Any) -> None:
        if not isinstance(db_obj, self.model):
            raise InvalidModelTypeError(self.model, db_obj)
