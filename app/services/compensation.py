"""
Multi-step writes: a parent row plus the join rows that hang off it.

The parent is committed on its own first. If any dependent insert then
fails, the transaction is rolled back and the parent is deleted again on a
best-effort basis. A failed cleanup is logged and never replaces the error
the caller sees.
"""
from typing import Any, Awaitable, Callable, Dict, Sequence
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import SaveFailedException
from app.core.logging import get_logger
from app.models.base import BaseModel
from app.repositories.base import BaseRepository

logger = get_logger(__name__)

LinkStep = Callable[[UUID], Awaitable[None]]


async def discard_created(
    db: AsyncSession,
    repo: BaseRepository,
    row_id: UUID,
    *,
    entity: str,
) -> bool:
    """Compensating delete. Returns False when the row could not be removed."""
    try:
        await repo.delete(db, row_id)
        await db.commit()
    except SQLAlchemyError as exc:
        logger.warning(
            "compensating_delete_failed",
            entity=entity,
            id=str(row_id),
            error=str(exc),
        )
        return False

    logger.info("compensating_delete_done", entity=entity, id=str(row_id))
    return True


async def create_with_links(
    db: AsyncSession,
    repo: BaseRepository,
    *,
    values: Dict[str, Any],
    link_steps: Sequence[LinkStep],
    entity: str,
    failure_message: str,
) -> BaseModel:
    """
    Insert and commit the parent row, then run each link step with its id.

    Raises:
        SaveFailedException: the parent insert or any link step failed
    """
    try:
        parent = await repo.create(db, **values)
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error(f"{entity}_create_failed", error=str(exc))
        raise SaveFailedException(failure_message) from exc

    # A rollback expires the instance; the id must be read before any step runs
    parent_id = parent.id

    try:
        for step in link_steps:
            await step(parent_id)
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error(f"{entity}_links_failed", id=str(parent_id), error=str(exc))
        await discard_created(db, repo, parent_id, entity=entity)
        raise SaveFailedException(failure_message) from exc

    return parent
