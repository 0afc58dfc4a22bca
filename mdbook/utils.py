"""Helpers for building HTML anchors and escaping text."""

from __future__ import annotations

import logging
import re
import warnings
from collections.abc import MutableMapping

__all__ = [
    "MDBOOK_VERSION",
    "collapse_whitespace",
    "normalize_id",
    "id_from_content",
    "unique_id_from_content",
    "log_backtrace",
    "bracket_escape",
]

MDBOOK_VERSION = "0.5.0-alpha.1"
"""The version that custom preprocessors and renderers can check against."""

logger = logging.getLogger(__name__)

_MULTI_WHITESPACE = re.compile(r"\s\s+")
_HTML_TAG = re.compile(r"(<.*?>)")
_HTML_ENTITIES = ("&lt;", "&gt;", "&amp;", "&#39;", "&quot;")


def collapse_whitespace(text: str) -> str:
    """Replace runs of two or more whitespace characters with one space."""
    return _MULTI_WHITESPACE.sub(" ", text)


def _normalize_char(ch: str) -> str:
    if ch.isalnum() or ch in "_-":
        return ch.lower() if ch.isascii() else ch
    if ch.isspace():
        return "-"
    return ""


def normalize_id(content: str) -> str:
    """Turn ``content`` into an HTML element id without whitespace."""
    return "".join(_normalize_char(ch) for ch in content)


def _id_from_content(content: str) -> str:
    content = _HTML_TAG.sub("", content)
    for entity in _HTML_ENTITIES:
        content = content.replace(entity, "")
    trimmed = content.strip().lstrip("#").strip()
    return normalize_id(trimmed)


def id_from_content(content: str) -> str:
    """Derive an anchor id from a header's text.

    Deprecated: use :func:`unique_id_from_content` instead.
    """
    warnings.warn(
        "id_from_content is deprecated; use unique_id_from_content instead",
        DeprecationWarning,
        stacklevel=2,
    )
    return _id_from_content(content)


def unique_id_from_content(content: str, id_counter: MutableMapping[str, int]) -> str:
    """Derive an anchor id, made unique by counting ids seen in ``id_counter``."""
    base = _id_from_content(content)
    count = id_counter.get(base, 0)
    id_counter[base] = count + 1
    return base if count == 0 else f"{base}-{count}"


def log_backtrace(error: BaseException) -> None:
    """Log ``error`` followed by each exception in its chain of causes."""
    logger.error("Error: %s", error)
    seen = {id(error)}
    cause = error.__cause__ or (None if error.__suppress_context__ else error.__context__)
    while cause is not None and id(cause) not in seen:
        seen.add(id(cause))
        logger.error("\tCaused By: %s", cause)
        cause = cause.__cause__ or (None if cause.__suppress_context__ else cause.__context__)


def bracket_escape(s: str) -> str:
    """Escape ``<`` and ``>`` for HTML."""
    return s.replace("<", "&lt;").replace(">", "&gt;")