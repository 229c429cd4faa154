"""
Execute a :class:`~pafiso.search.SearchPlan` built over ``Select``
statements.

Usage::

    plan = params.apply(select(Product))
    page = to_paged_list(session, plan, params.paging)

    # async, one session: the two queries run one after the other
    page = await to_paged_list_async(session, plan, params.paging)

    # async, one session per query: both run concurrently
    page = await to_paged_list_concurrent(async_session_factory, plan, params.paging)
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from sqlalchemy import Select, func, select

from pafiso.paged_list import PagedList

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlalchemy.orm import Session

    from pafiso.paging import Paging
    from pafiso.search import SearchPlan

logger = logging.getLogger(__name__)


def count_statement(stmt: Select[Any]) -> Select[tuple[int]]:
    """``SELECT count(*)`` over *stmt* with its ordering stripped."""
    return select(func.count()).select_from(stmt.order_by(None).subquery())


def to_paged_list(
    session: Session,
    plan: SearchPlan,
    paging: Paging | None = None,
) -> PagedList[Any]:
    total = session.execute(count_statement(plan.count_source)).scalar_one()
    entries = session.scalars(plan.entries_source).all()
    logger.debug("Fetched page: %d of %d entries", len(entries), total)
    return PagedList.create(total, entries, paging)


async def to_paged_list_async(
    session: AsyncSession,
    plan: SearchPlan,
    paging: Paging | None = None,
) -> PagedList[Any]:
    total = (await session.execute(count_statement(plan.count_source))).scalar_one()
    entries = (await session.scalars(plan.entries_source)).all()
    logger.debug("Fetched page: %d of %d entries", len(entries), total)
    return PagedList.create(total, entries, paging)


async def to_paged_list_concurrent(
    session_factory: Callable[[], AsyncSession],
    plan: SearchPlan,
    paging: Paging | None = None,
) -> PagedList[Any]:
    """
    Run the count and entries queries concurrently.

    An ``AsyncSession`` must not be shared between concurrent tasks, so each
    query gets its own session from *session_factory* (typically an
    ``async_sessionmaker``).
    """

    async def count() -> int:
        async with session_factory() as session:
            return (await session.execute(count_statement(plan.count_source))).scalar_one()

    async def fetch() -> list[Any]:
        async with session_factory() as session:
            return list((await session.scalars(plan.entries_source)).all())

    total, entries = await asyncio.gather(count(), fetch())
    logger.debug("Fetched page concurrently: %d of %d entries", len(entries), total)
    return PagedList.create(total, entries, paging)
