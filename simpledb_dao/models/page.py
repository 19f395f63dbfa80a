from typing import Generic, Iterator, List, Optional, TypeVar

from pydantic import BaseModel, Field, field_validator

T = TypeVar('T')


class Page(BaseModel, Generic[T]):
    """
    One batch of entities plus the continuation token for the next batch.

    The token is opaque: pass it back unchanged to fetch the following page.
    A missing or empty token means there are no more pages.
    """

    items: List[T] = Field(default_factory=list, description="Entities of this page, in store order")
    next_token: Optional[str] = Field(None, description="Continuation token, None on the last page")

    @field_validator('next_token', mode='before')
    @classmethod
    def normalize_next_token(cls, v):
        return v or None

    @property
    def has_more(self) -> bool:
        """Returns True if there are more pages available."""
        return self.next_token is not None

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[T]:  # type: ignore[override]
        """Iterate over the entities, not the model fields."""
        return iter(self.items)
