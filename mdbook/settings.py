"""Typed sections of the book configuration: ``[book]``, ``[build]``, ``[rust]`` and ``[output.html]``.

Every section reads from and writes to plain dictionaries with kebab-case
keys, as found in ``book.toml``. Missing keys take their defaults, unknown
keys are ignored, and values of the wrong type raise :class:`ConfigError`.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from dataclasses import MISSING, dataclass, field, fields
from enum import Enum
from pathlib import Path, PurePath
from typing import Any, TypeVar

__all__ = [
    "ConfigError",
    "TextDirection",
    "RustEdition",
    "BookConfig",
    "BuildConfig",
    "RustConfig",
    "Print",
    "Fold",
    "Playground",
    "Code",
    "SearchChapterSettings",
    "Search",
    "HtmlConfig",
]


class ConfigError(ValueError):
    """Raised when configuration data cannot be understood."""


_RTL_LANGUAGES = frozenset(
    {
        "ar", "ara", "arc", "ae", "ave", "egy", "he", "heb", "nqo", "pal", "phn",
        "sam", "syc", "syr", "fa", "per", "fas", "ku", "kur", "ur", "urd",
        "pus", "ps", "yi", "yid",
    }
)


class TextDirection(Enum):
    """Direction of text in the rendered book."""

    LEFT_TO_RIGHT = "ltr"
    RIGHT_TO_LEFT = "rtl"

    @classmethod
    def from_lang_code(cls, code: str) -> TextDirection:
        """Derive the text direction from a language code."""
        return cls.RIGHT_TO_LEFT if code in _RTL_LANGUAGES else cls.LEFT_TO_RIGHT


class RustEdition(Enum):
    """Rust edition used for code samples."""

    E2024 = "2024"
    E2021 = "2021"
    E2018 = "2018"
    E2015 = "2015"


Parser = Callable[[Any, str], Any]
_E = TypeVar("_E", bound=Enum)


def _describe(value: Any) -> str:
    return type(value).__name__


def _string(value: Any, key: str) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"invalid type for `{key}`: expected a string, found {_describe(value)}")
    return value


def _boolean(value: Any, key: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"invalid type for `{key}`: expected a boolean, found {_describe(value)}")
    return value


def _integer(maximum: int) -> Parser:
    def parse(value: Any, key: str) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(
                f"invalid type for `{key}`: expected an integer, found {_describe(value)}"
            )
        if not 0 <= value <= maximum:
            raise ConfigError(f"invalid value for `{key}`: {value} is not within 0..={maximum}")
        return value

    return parse


_u8 = _integer(0xFF)
_u32 = _integer(0xFFFF_FFFF)


def _path(value: Any, key: str) -> Path:
    if isinstance(value, (str, os.PathLike)):
        return Path(value)
    raise ConfigError(f"invalid type for `{key}`: expected a path, found {_describe(value)}")


def _optional(parse: Parser) -> Parser:
    def wrapped(value: Any, key: str) -> Any:
        return None if value is None else parse(value, key)

    return wrapped


def _list(parse: Parser) -> Parser:
    def wrapped(value: Any, key: str) -> list[Any]:
        if not isinstance(value, (list, tuple)):
            raise ConfigError(
                f"invalid type for `{key}`: expected an array, found {_describe(value)}"
            )
        return [parse(item, f"{key}[{index}]") for index, item in enumerate(value)]

    return wrapped


def _mapping(parse: Parser) -> Parser:
    def wrapped(value: Any, key: str) -> dict[str, Any]:
        if not isinstance(value, Mapping):
            raise ConfigError(f"invalid type for `{key}`: expected a table, found {_describe(value)}")
        return {str(name): parse(item, f"{key}.{name}") for name, item in value.items()}

    return wrapped


def _choice(enum_cls: type[_E]) -> Parser:
    def parse(value: Any, key: str) -> _E:
        try:
            return enum_cls(value)
        except ValueError:
            expected = ", ".join(f"`{member.value}`" for member in enum_cls)
            raise ConfigError(
                f"unknown variant `{value}` for `{key}`, expected one of {expected}"
            ) from None

    return parse


def _section(section_cls: type[_Section]) -> Parser:
    def parse(value: Any, key: str) -> Any:
        if isinstance(value, section_cls):
            return value
        if not isinstance(value, Mapping):
            raise ConfigError(f"invalid type for `{key}`: expected a table, found {_describe(value)}")
        return section_cls.from_dict(value)

    return parse


def _setting(
    parse: Parser,
    default: Any = MISSING,
    *,
    factory: Any = MISSING,
    aliases: tuple[str, ...] = (),
) -> Any:
    metadata = {"parse": parse, "aliases": aliases}
    if factory is not MISSING:
        return field(default_factory=factory, metadata=metadata)
    return field(default=default, metadata=metadata)


def _dump(value: Any) -> Any:
    if isinstance(value, _Section):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, PurePath):
        return value.as_posix()
    if isinstance(value, (list, tuple)):
        return [_dump(item) for item in value]
    if isinstance(value, Mapping):
        return {key: _dump(item) for key, item in value.items()}
    return value


def _load_section(cls: type, data: Mapping[str, Any] | None) -> Any:
    """Build a section from a table, using defaults for missing keys."""
    if data is None:
        return cls()
    if not isinstance(data, Mapping):
        raise ConfigError(f"expected a table, found {_describe(data)}")
    values: dict[str, Any] = {}
    for spec in fields(cls):
        for key in (spec.name.replace("_", "-"), *spec.metadata["aliases"]):
            if key in data:
                values[spec.name] = spec.metadata["parse"](data[key], key)
                break
    return cls(**values)


def _dump_section(section: Any) -> dict[str, Any]:
    """Return a section as a table, leaving out unset optional values."""
    table: dict[str, Any] = {}
    for spec in fields(section):
        value = getattr(section, spec.name)
        if value is not None:
            table[spec.name.replace("_", "-")] = _dump(value)
    return table


class _Section:
    """Reading and writing of a configuration table with kebab-case keys."""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Any:
        """Build the section from a table, using defaults for missing keys."""
        return _load_section(cls, data)

    def to_dict(self) -> dict[str, Any]:
        """Return the section as a table, leaving out unset optional values."""
        return _dump_section(self)


@dataclass
class BookConfig(_Section):
    """Metadata about the book, needed to load it from disk."""

    title: str | None = _setting(_optional(_string), None)
    authors: list[str] = _setting(_list(_string), factory=list)
    description: str | None = _setting(_optional(_string), None)
    src: Path = _setting(_path, factory=lambda: Path("src"))
    language: str | None = _setting(_optional(_string), "en")
    text_direction: TextDirection | None = _setting(_optional(_choice(TextDirection)), None)

    def realized_text_direction(self) -> TextDirection:
        """The explicit text direction, or the one implied by the language."""
        if self.text_direction is not None:
            return self.text_direction
        return TextDirection.from_lang_code(self.language or "")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> BookConfig:
        """Build the ``[book]`` section from a table."""
        return _load_section(cls, data)

    def to_dict(self) -> dict[str, Any]:
        """Return the ``[book]`` section as a table."""
        return _dump_section(self)


@dataclass
class BuildConfig(_Section):
    """Settings for the build procedure."""

    build_dir: Path = _setting(_path, factory=lambda: Path("book"))
    create_missing: bool = _setting(_boolean, True)
    use_default_preprocessors: bool = _setting(_boolean, True)
    extra_watch_dirs: list[Path] = _setting(_list(_path), factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> BuildConfig:
        """Build the ``[build]`` section from a table."""
        return _load_section(cls, data)

    def to_dict(self) -> dict[str, Any]:
        """Return the ``[build]`` section as a table."""
        return _dump_section(self)


@dataclass
class RustConfig(_Section):
    """Settings for Rust code samples."""

    edition: RustEdition | None = _setting(_optional(_choice(RustEdition)), None)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> RustConfig:
        """Build the ``[rust]`` section from a table."""
        return _load_section(cls, data)

    def to_dict(self) -> dict[str, Any]:
        """Return the ``[rust]`` section as a table."""
        return _dump_section(self)


@dataclass
class Print(_Section):
    """How the print icon, print page and print styles are rendered."""

    enable: bool = _setting(_boolean, True)
    page_break: bool = _setting(_boolean, True)


@dataclass
class Fold(_Section):
    """How chapters fold in the sidebar."""

    enable: bool = _setting(_boolean, False)
    level: int = _setting(_u8, 0)


@dataclass
class Playground(_Section):
    """How code samples are made runnable."""

    editable: bool = _setting(_boolean, False)
    copyable: bool = _setting(_boolean, True)
    copy_js: bool = _setting(_boolean, True)
    line_numbers: bool = _setting(_boolean, False)
    runnable: bool = _setting(_boolean, True)


@dataclass
class Code(_Section):
    """How code blocks are rendered."""

    hidelines: dict[str, str] = _setting(_mapping(_string), factory=dict)


@dataclass
class SearchChapterSettings(_Section):
    """Search settings for one chapter or directory."""

    enable: bool | None = _setting(_optional(_boolean), None)


@dataclass
class Search(_Section):
    """Settings of the search feature."""

    enable: bool = _setting(_boolean, True)
    limit_results: int = _setting(_u32, 30)
    teaser_word_count: int = _setting(_u32, 30)
    use_boolean_and: bool = _setting(_boolean, False)
    boost_title: int = _setting(_u8, 2)
    boost_hierarchy: int = _setting(_u8, 1)
    boost_paragraph: int = _setting(_u8, 1)
    expand: bool = _setting(_boolean, True)
    heading_split_level: int = _setting(_u8, 3)
    copy_js: bool = _setting(_boolean, True)
    chapter: dict[str, SearchChapterSettings] = _setting(
        _mapping(_section(SearchChapterSettings)), factory=dict
    )


@dataclass
class HtmlConfig(_Section):
    """Settings of the HTML renderer."""

    theme: Path | None = _setting(_optional(_path), None)
    default_theme: str | None = _setting(_optional(_string), None)
    preferred_dark_theme: str | None = _setting(_optional(_string), None)
    smart_punctuation: bool = _setting(_boolean, False)
    curly_quotes: bool = _setting(_boolean, False)
    mathjax_support: bool = _setting(_boolean, False)
    copy_fonts: bool = _setting(_boolean, True)
    additional_css: list[Path] = _setting(_list(_path), factory=list)
    additional_js: list[Path] = _setting(_list(_path), factory=list)
    fold: Fold = _setting(_section(Fold), factory=Fold)
    playground: Playground = _setting(
        _section(Playground), factory=Playground, aliases=("playpen",)
    )
    code: Code = _setting(_section(Code), factory=Code)
    print: Print = _setting(_section(Print), factory=Print)
    no_section_label: bool = _setting(_boolean, False)
    search: Search | None = _setting(_optional(_section(Search)), None)
    git_repository_url: str | None = _setting(_optional(_string), None)
    git_repository_icon: str | None = _setting(_optional(_string), None)
    input_404: str | None = _setting(_optional(_string), None)
    site_url: str | None = _setting(_optional(_string), None)
    cname: str | None = _setting(_optional(_string), None)
    edit_url_template: str | None = _setting(_optional(_string), None)
    live_reload_endpoint: str | None = _setting(_optional(_string), None)
    redirect: dict[str, str] = _setting(_mapping(_string), factory=dict)
    hash_files: bool = _setting(_boolean, False)

    def theme_dir(self, root: str | os.PathLike[str]) -> Path:
        """The theme directory under ``root``, ``theme`` unless configured."""
        return Path(root) / (self.theme if self.theme is not None else "theme")

    def uses_smart_punctuation(self) -> bool:
        """Whether smart punctuation is on, through either of its settings."""
        return self.smart_punctuation or self.curly_quotes

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> HtmlConfig:
        """Build the ``[output.html]`` section from a table."""
        return _load_section(cls, data)

    def to_dict(self) -> dict[str, Any]:
        """Return the ``[output.html]`` section as a table."""
        return _dump_section(self)