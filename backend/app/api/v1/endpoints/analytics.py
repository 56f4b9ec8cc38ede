"""
统计API端点
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Request

from app.api.deps import get_analytics_service, get_rate_limiter
from app.core.config import settings
from app.core.exceptions import RateLimitExceededError
from app.core.rate_limit import RateLimiter, get_client_ip
from app.core.security import AdminIdentity, get_current_admin
from app.schemas.analytics import AppOpenRequest, AppOpenResponse, AppOpenStatsResponse
from app.services.analytics import AnalyticsService

router = APIRouter(tags=["统计"])


def enforce_app_open_rate_limit(
    request: Request,
    limiter: RateLimiter = Depends(get_rate_limiter)
) -> None:
    """按客户端IP限制应用打开上报频率"""
    client_ip = get_client_ip(request)
    limited = limiter.check_and_increment(
        client_ip or "",
        settings.app_open_rate_limit_max_requests,
        settings.app_open_rate_limit_window_ms,
    )
    if limited:
        raise RateLimitExceededError("Too many requests", details={"client_ip": client_ip})


@router.post(
    "/app-open",
    response_model=AppOpenResponse,
    summary="上报应用打开",
    dependencies=[Depends(enforce_app_open_rate_limit)]
)
async def track_app_open(
    payload: Optional[AppOpenRequest] = Body(None),
    service: AnalyticsService = Depends(get_analytics_service)
):
    """记录一次应用打开，统计失败不影响响应"""
    await service.track_app_open(payload.platform if payload else None)
    return AppOpenResponse(success=True)


@router.get("/stats", response_model=AppOpenStatsResponse, summary="应用打开统计")
async def app_open_stats(
    service: AnalyticsService = Depends(get_analytics_service),
    admin: AdminIdentity = Depends(get_current_admin)
):
    return await service.get_app_open_stats()
