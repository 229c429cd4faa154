"""
Native case-insensitive match hook.

A single process-wide slot holding the builder a remote-queryable adapter
uses to lower case-insensitive equality and substring tests to its own
pattern-match primitive (``ILIKE`` for SQL)::

    register_case_insensitive_match_builder(
        lambda column, pattern: column.ilike(pattern, escape="\\\\")
    )

The builder receives the backend's member expression and a LIKE pattern
whose wildcards were escaped with :func:`pafiso.coercion.escape_like_pattern`
(``%`` is added around the value for substring tests).  Re-registering
replaces the previous builder.  When the slot is empty, backends fold both
sides to one case instead.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

CaseInsensitiveMatchBuilder = Callable[[Any, str], Any]

_match_builder: CaseInsensitiveMatchBuilder | None = None


def register_case_insensitive_match_builder(
    builder: CaseInsensitiveMatchBuilder,
) -> None:
    global _match_builder
    if _match_builder is not None and _match_builder is not builder:
        logger.info("Replacing case-insensitive match builder %r", _match_builder)
    _match_builder = builder


def get_case_insensitive_match_builder() -> CaseInsensitiveMatchBuilder | None:
    return _match_builder


def clear_case_insensitive_match_builder() -> None:
    global _match_builder
    _match_builder = None
