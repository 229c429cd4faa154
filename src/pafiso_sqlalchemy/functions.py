"""
SQL functions compiled per dialect.

``LIKE`` follows the column collation and ignores ASCII case on SQLite
and on MySQL's default collations, so case-sensitive substring tests use
:class:`substring_position` instead::

    stmt.where(substring_position(Product.name, "Lap") > 0)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import Integer
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.functions import FunctionElement

if TYPE_CHECKING:
    from sqlalchemy.sql.compiler import SQLCompiler


class substring_position(FunctionElement[int]):
    """1-based position of ``needle`` in ``haystack``; 0 when absent."""

    type = Integer()
    inherit_cache = True
    name = "substring_position"


def _operands(element: Any, compiler: SQLCompiler, **kw: Any) -> tuple[str, str]:
    haystack, needle = list(element.clauses)
    return compiler.process(haystack, **kw), compiler.process(needle, **kw)


@compiles(substring_position)
def _substring_position_default(element: Any, compiler: SQLCompiler, **kw: Any) -> str:
    haystack, needle = _operands(element, compiler, **kw)
    return f"instr({haystack}, {needle})"


@compiles(substring_position, "postgresql")
def _substring_position_postgresql(element: Any, compiler: SQLCompiler, **kw: Any) -> str:
    haystack, needle = _operands(element, compiler, **kw)
    return f"strpos({haystack}, {needle})"


@compiles(substring_position, "mysql")
def _substring_position_mysql(element: Any, compiler: SQLCompiler, **kw: Any) -> str:
    """MySQL's ``instr`` follows the collation; compare bytes instead."""
    haystack, needle = _operands(element, compiler, **kw)
    return f"instr(CAST({haystack} AS BINARY), {needle})"


@compiles(substring_position, "mssql")
def _substring_position_mssql(element: Any, compiler: SQLCompiler, **kw: Any) -> str:
    haystack, needle = _operands(element, compiler, **kw)
    return f"charindex({needle}, {haystack} COLLATE Latin1_General_BIN)"
