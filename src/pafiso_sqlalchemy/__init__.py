"""
SQLAlchemy adapter for pafiso.

Call :func:`register` once at start-up; afterwards ``Select`` statements
are accepted wherever pafiso accepts a source::

    import pafiso_sqlalchemy

    pafiso_sqlalchemy.register()
    plan = params.apply(select(Product))
    page = pafiso_sqlalchemy.to_paged_list(session, plan, params.paging)
"""

from __future__ import annotations

import logging
from typing import Any

from pafiso.backend import register_backend, unregister_backend
from pafiso.hooks import (
    clear_case_insensitive_match_builder,
    get_case_insensitive_match_builder,
    register_case_insensitive_match_builder,
)
from pafiso.introspection import register_inspector, unregister_inspector

from .backend import SQLAlchemyBackend
from .introspection import inspect_mapped_class
from .operators import build_default_sqla_registry
from .paged import count_statement, to_paged_list, to_paged_list_async, to_paged_list_concurrent
from .strategy import SQLAlchemyOperator, SQLAlchemyOperatorRegistry

logger = logging.getLogger(__name__)


def ilike_match(column: Any, pattern: str) -> Any:
    """Case-insensitive match hook lowering to ``ILIKE``."""
    return column.ilike(pattern, escape="\\")


def register(
    registry: SQLAlchemyOperatorRegistry | None = None,
    *,
    native_match: bool = True,
) -> SQLAlchemyBackend:
    """
    Register the ``Select`` backend and the mapped-class inspector, and
    install :func:`ilike_match` as the case-insensitive match hook.

    Calling it again replaces the previous backend instance.
    """
    backend = SQLAlchemyBackend(registry)
    register_backend(backend)
    register_inspector(inspect_mapped_class)
    if native_match:
        register_case_insensitive_match_builder(ilike_match)
    logger.info("pafiso SQLAlchemy adapter registered (native_match=%s)", native_match)
    return backend


def unregister() -> None:
    """Undo :func:`register`."""
    unregister_backend(SQLAlchemyBackend)
    unregister_inspector(inspect_mapped_class)
    if get_case_insensitive_match_builder() is ilike_match:
        clear_case_insensitive_match_builder()


__all__ = [
    # Registration
    "register",
    "unregister",
    "ilike_match",
    # Backend / strategy
    "SQLAlchemyBackend",
    "SQLAlchemyOperator",
    "SQLAlchemyOperatorRegistry",
    "build_default_sqla_registry",
    "inspect_mapped_class",
    # Execution
    "count_statement",
    "to_paged_list",
    "to_paged_list_async",
    "to_paged_list_concurrent",
]
