from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from korat.features.audit.schemas.audit import AuditDeleted, AuditIn, AuditOut
from korat.features.audit.services.analyzer import analyze_url
from korat.features.audit.services.audit_store import (
    create_audit,
    delete_audit_for_owner,
    get_audit_for_owner,
    list_audits_for_owner,
)
from korat.features.auth.dependencies.identity import get_current_user_id
from korat.platform.config import settings
from korat.platform.db.session import get_db
from korat.platform.logger import get_logger
from korat.platform.response import json_response

logger = get_logger("audit_routes")
router = APIRouter(tags=["Audits"])


@router.post(
    "/analyze-url",
    response_model=AuditOut,
    status_code=status.HTTP_200_OK,
    summary="Analyze a URL",
    description="Fetch the page, score it and store the audit for the caller",
)
async def analyze_url_route(
    # The identity dependency resolves before the body is validated, so a
    # request with neither credential nor url gets 401, not 400.
    audit_in: AuditIn,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    logger.info(f"Audit requested by {user_id} for URL: {audit_in.url}")

    result = await analyze_url(audit_in.url)
    audit = await create_audit(db=db, user_id=user_id, url=audit_in.url, result=result)

    return json_response(AuditOut.model_validate(audit))


@router.get(
    "/audits",
    response_model=list[AuditOut],
    status_code=status.HTTP_200_OK,
    summary="List audits",
    description="Most recent audits of the caller, newest first",
)
async def list_audits_route(
    limit: int = Query(
        settings.AUDIT_HISTORY_DEFAULT_LIMIT, ge=1, le=settings.AUDIT_HISTORY_MAX_LIMIT
    ),
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    audits = await list_audits_for_owner(db=db, user_id=user_id, limit=limit)
    return json_response([AuditOut.model_validate(audit) for audit in audits])


@router.get(
    "/audits/{audit_id}",
    response_model=AuditOut,
    status_code=status.HTTP_200_OK,
    summary="Get audit details",
)
async def get_audit_route(
    audit_id: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    audit = await get_audit_for_owner(db=db, audit_id=audit_id, user_id=user_id)
    return json_response(AuditOut.model_validate(audit))


@router.delete(
    "/audits/{audit_id}",
    response_model=AuditDeleted,
    status_code=status.HTTP_200_OK,
    summary="Delete an audit",
    description="Permanently remove an audit belonging to the caller",
)
async def delete_audit_route(
    audit_id: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    await delete_audit_for_owner(db=db, audit_id=audit_id, user_id=user_id)
    logger.info(f"Audit {audit_id} deleted by {user_id}")
    return json_response(AuditDeleted(id=audit_id))
