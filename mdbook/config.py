"""The book configuration: an in-memory form of ``book.toml``.

:class:`Config` holds the typed ``[book]``, ``[build]`` and ``[rust]`` tables
and keeps every other table (``[output.*]``, ``[preprocessor.*]`` and so on)
as plain data that renderers and preprocessors read with dotted keys.
"""

from __future__ import annotations

import copy
import json
import logging
import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from pathlib import PurePath
from typing import Any, TypeVar

import tomli_w

from .settings import BookConfig, BuildConfig, ConfigError, HtmlConfig, RustConfig
from .tomlext import delete_key, insert_key, read_key
from .utils import log_backtrace

__all__ = ["Config", "ConfigError", "parse_env", "is_legacy_format"]

logger = logging.getLogger(__name__)

_ENV_PREFIX = "MDBOOK_"
_VALID_TOP_LEVEL = ("book", "build", "rust", "output", "preprocessor")
_LEGACY_KEYS = ("title", "authors", "source", "description", "output.html.destination")
_LEGACY_BOOK_FIELDS = (
    ("title", "title"),
    ("authors", "authors"),
    ("source", "src"),
    ("description", "description"),
)

_S = TypeVar("_S", BookConfig, BuildConfig, RustConfig)


def parse_env(key: str) -> str | None:
    """Turn an ``MDBOOK_`` environment variable name into a dotted config key.

    ``__`` separates nested keys and ``_`` becomes ``-``; names without the
    prefix give ``None``.
    """
    if not key.startswith(_ENV_PREFIX):
        return None
    return key[len(_ENV_PREFIX):].lower().replace("__", ".").replace("_", "-")


def is_legacy_format(table: Mapping[str, Any]) -> bool:
    """Whether ``table`` uses the old layout with metadata at the top level."""
    return any(read_key(table, key) is not None for key in _LEGACY_KEYS)


def _to_toml_value(value: Any) -> Any:
    """Convert ``value`` into data that TOML can represent."""
    if value is None:
        raise ConfigError("Unable to represent the item as a TOML value: unsupported None value")
    if isinstance(value, (bool, int, float, str, datetime, date, time)):
        return value
    if isinstance(value, PurePath):
        return value.as_posix()
    if isinstance(value, os.PathLike):
        return os.fspath(value)
    if isinstance(value, Enum):
        return _to_toml_value(value.value)
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return _to_toml_value(to_dict())
    if isinstance(value, Mapping):
        return {
            str(key): _to_toml_value(item) for key, item in value.items() if item is not None
        }
    if isinstance(value, (list, tuple)):
        return [_to_toml_value(item) for item in value]
    raise ConfigError(
        f"Unable to represent the item as a TOML value: unsupported type {type(value).__name__}"
    )


def _update_section(section: _S, key: str, value: Any) -> _S:
    """Return ``section`` with ``key`` replaced, or unchanged if that makes it invalid."""
    raw = insert_key(section.to_dict(), key, value)
    try:
        return type(section).from_dict(raw)
    except ConfigError:
        return section


def _parse_env_value(value: str) -> Any:
    def reject_constant(name: str) -> Any:
        raise ValueError(name)

    try:
        return json.loads(value, parse_constant=reject_constant)
    except ValueError:
        return value


def _sorted_tables(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _sorted_tables(value[key]) for key in sorted(value)}
    if isinstance(value, list):
        return [_sorted_tables(item) for item in value]
    return value


@dataclass
class Config:
    """The whole book configuration."""

    book: BookConfig = field(default_factory=BookConfig)
    build: BuildConfig = field(default_factory=BuildConfig)
    rust: RustConfig = field(default_factory=RustConfig)
    rest: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_str(cls, src: str) -> Config:
        """Load a configuration from TOML text."""
        try:
            return cls.from_dict(tomllib.loads(src))
        except (tomllib.TOMLDecodeError, ConfigError) as exc:
            raise ConfigError(f"Invalid configuration file: {exc}") from exc

    @classmethod
    def from_disk(cls, config_file: str | os.PathLike[str]) -> Config:
        """Load a configuration from a TOML file."""
        try:
            with open(config_file, "rb") as handle:
                raw = handle.read()
        except OSError as exc:
            raise ConfigError("Unable to open the configuration file") from exc
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ConfigError("Couldn't read the file") from exc
        return cls.from_str(text)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Config:
        """Build a configuration from a parsed TOML table."""
        if not isinstance(data, Mapping):
            raise ConfigError("A config file should always be a toml table")
        table = copy.deepcopy(dict(data))

        if is_legacy_format(table):
            for line in (
                "It looks like you are using the legacy book.toml format.",
                "We'll parse it for now, but you should probably convert to the new format.",
                "As a rule of thumb, move all top level configuration entries like `title`,",
                "`author` and `description` under a table called `[book]`, and move the",
                "`destination` entry from `[output.html]`, renamed to `build-dir`, under a",
                "table called `[build]`.",
            ):
                logger.warning(line)
            return cls._from_legacy(table)

        for item in table:
            if item not in _VALID_TOP_LEVEL:
                logger.warning("Invalid field %r in book.toml", item)

        return cls(
            book=BookConfig.from_dict(table.pop("book", None)),
            build=BuildConfig.from_dict(table.pop("build", None)),
            rust=RustConfig.from_dict(table.pop("rust", None)),
            rest=table,
        )

    @classmethod
    def _from_legacy(cls, table: dict[str, Any]) -> Config:
        cfg = cls()
        for legacy_key, attribute in _LEGACY_BOOK_FIELDS:
            if legacy_key not in table:
                continue
            value = table.pop(legacy_key)
            try:
                parsed = BookConfig.from_dict({attribute.replace("_", "-"): value})
            except ConfigError:
                continue
            setattr(cfg.book, attribute, getattr(parsed, attribute))

        destination = delete_key(table, "output.html.destination")
        if destination is not None:
            try:
                cfg.build.build_dir = BuildConfig.from_dict({"build-dir": destination}).build_dir
            except ConfigError:
                pass

        cfg.rest = table
        return cfg

    def update_from_env(self, environ: Mapping[str, str] | None = None) -> None:
        """Override settings from ``MDBOOK_`` environment variables.

        ``MDBOOK_FOO_BAR__BAZ`` sets ``foo-bar.baz``. Values are read as JSON
        where they parse, and as plain strings otherwise. A JSON object given
        for ``book`` or ``build`` sets each of its keys in that table.
        """
        logger.debug("Updating the config from environment variables")
        if environ is None:
            environ = os.environ

        for name, raw_value in list(environ.items()):
            key = parse_env(name)
            if key is None:
                continue
            logger.debug("%s => %s", key, raw_value)
            value = _parse_env_value(raw_value)

            if key in ("book", "build") and isinstance(value, dict):
                for sub_key, sub_value in value.items():
                    self.set(f"{key}.{sub_key}", sub_value)
                return

            self.set(key, value)

    def get(self, name: str) -> Any | None:
        """Return a copy of the value at the dotted key ``name``, or ``None``.

        Only the free-form tables are searched, not ``book``, ``build`` or ``rust``.
        """
        value = read_key(self.rest, name)
        return None if value is None else copy.deepcopy(value)

    def html_config(self) -> HtmlConfig | None:
        """The ``[output.html]`` settings, or ``None`` if absent or invalid."""
        raw = self.get("output.html")
        if raw is None:
            return None
        try:
            try:
                return HtmlConfig.from_dict(raw)
            except ConfigError as exc:
                raise ConfigError("Parsing configuration [output.html]") from exc
        except ConfigError as error:
            log_backtrace(error)
            return None

    def set(self, index: str, value: Any) -> None:
        """Set the value at the dotted key ``index``, replacing what is in the way.

        Raises :class:`ConfigError` if the value cannot be represented in TOML.
        """
        converted = _to_toml_value(value)
        section, dot, key = index.partition(".")
        if dot and section == "book":
            self.book = _update_section(self.book, key, converted)
        elif dot and section == "build":
            self.build = _update_section(self.build, key, converted)
        elif dot and section == "rust":
            self.rust = _update_section(self.rust, key, converted)
        else:
            self.rest = insert_key(self.rest, index, converted)

    def to_dict(self) -> dict[str, Any]:
        """The configuration as a TOML table; default build and rust tables are left out."""
        table = copy.deepcopy(self.rest)
        table["book"] = self.book.to_dict()
        if self.build != BuildConfig():
            table["build"] = self.build.to_dict()
        if self.rust != RustConfig():
            table["rust"] = self.rust.to_dict()
        return table

    def to_toml(self) -> str:
        """The configuration as ``book.toml`` text, with keys in sorted order."""
        return tomli_w.dumps(_sorted_tables(self.to_dict()))