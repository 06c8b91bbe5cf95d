from typing import Callable, Generic, List, TypeVar

from pydantic import BaseModel

from app.db.paging import Page

T = TypeVar("T")


class PageOut(BaseModel, Generic[T]):
    content: List[T]
    total_elements: int
    total_pages: int
    number: int
    size: int
    number_of_elements: int
    first: bool
    last: bool

    @classmethod
    def from_page(cls, page: Page, convert: Callable) -> "PageOut":
        return cls(
            content=[convert(x) for x in page.content],
            total_elements=page.total_elements,
            total_pages=page.total_pages,
            number=page.number,
            size=page.size,
            number_of_elements=page.number_of_elements,
            first=page.first,
            last=page.last,
        )
