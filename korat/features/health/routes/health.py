from fastapi import APIRouter, status

from korat.platform.response import json_response

router = APIRouter()


@router.get("/health", tags=["health"])
async def health_check():
    return json_response(
        {"status": "ok", "service": "KORAT SEO Audit"},
        status_code=status.HTTP_200_OK,
    )
