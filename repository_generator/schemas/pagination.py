from typing import Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict, Field

DataT = TypeVar("DataT")


class Page(BaseModel, Generic[DataT]):
    """One page of records together with the size of the whole (unfiltered) table."""

    # Items are ORM instances, not pydantic models
    model_config = ConfigDict(arbitrary_types_allowed=True)

    page: int = Field(1, description="Current page number, starting at 1")
    page_size: int = Field(10, description="Maximum number of items on a page")
    total_count: int = Field(0, description="Total number of items in the table")
    items: List[DataT] = Field(default_factory=list)

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return (self.total_count + self.page_size - 1) // self.page_size

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages
