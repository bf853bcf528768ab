from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from korat.features.audit.models.audit import Audit
from korat.features.audit.schemas.audit import AnalysisResult
from korat.platform.exceptions import NotFoundError, PersistenceError
from korat.platform.logger import get_logger

logger = get_logger("audit_store")


# ─────────────────────────────────────────────────────────────
# Owner-scoped audit persistence (insert, get, list, delete)
# ─────────────────────────────────────────────────────────────

async def create_audit(
    db: AsyncSession,
    user_id: str,
    url: str,
    result: AnalysisResult,
) -> Audit:
    """
    Store one analysis result for its owner and return the persisted row.
    Issue lists are stored without empty suggestion keys.
    """
    audit = Audit(
        user_id=user_id,
        url=url,
        **result.model_dump(mode="json", exclude_none=True),
    )
    db.add(audit)
    try:
        await db.commit()
        await db.refresh(audit)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to save audit for {url}: {e}", exc_info=True)
        raise PersistenceError(f"Failed to save audit: {e}")
    return audit


async def get_audit_for_owner(db: AsyncSession, audit_id: str, user_id: str) -> Audit:
    """Get an audit by ID if it belongs to the caller"""
    query = select(Audit).where(Audit.id == audit_id, Audit.user_id == user_id)
    result = await db.execute(query)
    audit = result.scalars().first()
    if not audit:
        raise NotFoundError("Audit not found")
    return audit


async def list_audits_for_owner(db: AsyncSession, user_id: str, limit: int):
    """Most recent audits first"""
    query = (
        select(Audit)
        .where(Audit.user_id == user_id)
        .order_by(Audit.scanned_at.desc(), Audit.id.desc())
        .limit(limit)
    )
    result = await db.execute(query)
    return result.scalars().all()


async def delete_audit_for_owner(db: AsyncSession, audit_id: str, user_id: str) -> None:
    """Permanently delete an audit if it belongs to the caller"""
    stmt = delete(Audit).where(Audit.id == audit_id, Audit.user_id == user_id)
    result = await db.execute(stmt)
    if result.rowcount == 0:
        await db.rollback()
        raise NotFoundError("Audit not found")
    await db.commit()
