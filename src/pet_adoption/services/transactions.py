"""
pet_adoption.services.transactions

Commit helper shared by services.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from pet_adoption.errors import DuplicateError


@asynccontextmanager
async def committing(session: AsyncSession, *, duplicate_message: str) -> AsyncIterator[None]:
    """
    Run the block's writes and commit them as one unit.

    A unique-constraint violation (including a lost race with a concurrent
    writer) rolls everything back and surfaces as `DuplicateError`.
    """

    try:
        yield
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        raise DuplicateError(duplicate_message) from e
    except BaseException:
        await session.rollback()
        raise
