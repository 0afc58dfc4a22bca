"""A tree structure representing a book."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

__all__ = ["SectionNumber", "Separator", "PartTitle", "Chapter", "BookItem", "Book"]


class SectionNumber(list):
    """A section number such as ``1.2.3.``: a list of integers with a dotted form."""

    def __str__(self) -> str:
        if not self:
            return "0"
        return "".join(f"{item}." for item in self)

    def __repr__(self) -> str:
        return f"SectionNumber({list(self)!r})"


@dataclass(frozen=True)
class Separator:
    """A section separator."""


@dataclass
class PartTitle:
    """A part title."""

    title: str


_SAME_AS_PATH: Any = object()


def _to_path(value: str | os.PathLike[str] | None) -> Path | None:
    return None if value is None else Path(value)


@dataclass
class Chapter:
    """A chapter, usually mapping to one file on disk, possibly with sub-chapters.

    ``path`` and ``source_path`` are relative to ``SUMMARY.md``. Unless given,
    ``source_path`` is the same as ``path``. A chapter without a path is a draft.
    """

    name: str
    content: str = ""
    path: Path | None = None
    parent_names: list[str] = field(default_factory=list)
    number: SectionNumber | None = None
    sub_items: list[BookItem] = field(default_factory=list)
    source_path: Path | None = _SAME_AS_PATH

    def __post_init__(self) -> None:
        self.path = _to_path(self.path)
        if self.source_path is _SAME_AS_PATH:
            self.source_path = self.path
        else:
            self.source_path = _to_path(self.source_path)
        if self.number is not None and not isinstance(self.number, SectionNumber):
            self.number = SectionNumber(self.number)

    @classmethod
    def draft(cls, name: str, parent_names: list[str] | None = None) -> Chapter:
        """Create a draft chapter that has no source file and no content."""
        return cls(name, "", None, list(parent_names or []), source_path=None)

    def is_draft(self) -> bool:
        """Whether the chapter has no path to a source markdown file."""
        return self.path is None

    def __str__(self) -> str:
        if self.number is not None:
            return f"{self.number} {self.name}"
        return self.name

    def to_dict(self) -> dict[str, Any]:
        """Serialise the chapter's fields to plain data."""
        return {
            "name": self.name,
            "content": self.content,
            "number": None if self.number is None else list(self.number),
            "sub_items": [_item_to_dict(item) for item in self.sub_items],
            "path": None if self.path is None else self.path.as_posix(),
            "source_path": None if self.source_path is None else self.source_path.as_posix(),
            "parent_names": list(self.parent_names),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Chapter:
        """Build a chapter from the data produced by :meth:`to_dict`."""
        if not isinstance(data, dict) or "name" not in data:
            raise ValueError("a chapter needs a 'name'")
        number = data.get("number")
        return cls(
            name=data["name"],
            content=data.get("content", ""),
            path=_to_path(data.get("path")),
            parent_names=list(data.get("parent_names", [])),
            number=None if number is None else SectionNumber(number),
            sub_items=[_item_from_dict(item) for item in data.get("sub_items", [])],
            source_path=_to_path(data.get("source_path")),
        )


BookItem = Union[Chapter, Separator, PartTitle]


def _item_to_dict(item: BookItem) -> Any:
    if isinstance(item, Chapter):
        return {"Chapter": item.to_dict()}
    if isinstance(item, Separator):
        return "Separator"
    if isinstance(item, PartTitle):
        return {"PartTitle": item.title}
    raise TypeError(f"not a book item: {item!r}")


def _item_from_dict(data: Any) -> BookItem:
    if data == "Separator":
        return Separator()
    if isinstance(data, dict) and len(data) == 1:
        ((kind, body),) = data.items()
        if kind == "Chapter":
            return Chapter.from_dict(body)
        if kind == "PartTitle":
            if not isinstance(body, str):
                raise ValueError("a part title must be a string")
            return PartTitle(body)
        if kind == "Separator":
            return Separator()
    raise ValueError(f"unknown book item: {data!r}")


def _walk(items: list[BookItem]) -> Iterator[BookItem]:
    for item in items:
        yield item
        if isinstance(item, Chapter):
            yield from _walk(item.sub_items)


def _visit_post_order(func: Callable[[BookItem], Any], items: list[BookItem]) -> None:
    for item in items:
        if isinstance(item, Chapter):
            _visit_post_order(func, item.sub_items)
        func(item)


@dataclass
class Book:
    """A book: an ordered collection of items."""

    sections: list[BookItem] = field(default_factory=list)

    def iter(self) -> Iterator[BookItem]:
        """Iterate depth-first over every item, parents before their children."""
        return _walk(self.sections)

    def __iter__(self) -> Iterator[BookItem]:
        return self.iter()

    def for_each_mut(self, func: Callable[[BookItem], Any]) -> None:
        """Call ``func`` on every item, children before their parent chapter."""
        _visit_post_order(func, self.sections)

    def push_item(self, item: BookItem) -> Book:
        """Append an item and return the book."""
        self.sections.append(item)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Serialise the book to plain data."""
        return {
            "sections": [_item_to_dict(item) for item in self.sections],
            "__non_exhaustive": None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Book:
        """Build a book from the data produced by :meth:`to_dict`."""
        if not isinstance(data, dict):
            raise ValueError("a book must be a mapping")
        return cls([_item_from_dict(item) for item in data.get("sections", [])])