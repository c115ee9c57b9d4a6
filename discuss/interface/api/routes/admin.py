"""Admin routes: activity log and dashboard stats."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Query

from discuss.application.usecase.admin import (
    GetActivityLogRequest,
    GetActivityLogResponse,
    GetActivityLogUseCase,
    GetDashboardStatsRequest,
    GetDashboardStatsResponse,
    GetDashboardStatsUseCase,
)
from discuss.domain.service import JWTService
from discuss.domain.value import ActivityAction
from discuss.interface.api.security import read_token, require_actor

router = APIRouter(prefix="/admin", tags=["admin"], route_class=DishkaRoute)


@router.get("/activity", response_model=GetActivityLogResponse)
async def get_activity_log(
    get_activity_log_use_case: FromDishka[GetActivityLogUseCase],
    jwt_service: FromDishka[JWTService],
    token: str | None = Depends(read_token),
    user_id: UUID | None = None,
    action: ActivityAction | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
) -> GetActivityLogResponse:
    """Browse the activity log, newest first. Admins only.

    Args:
        get_activity_log_use_case: Activity log use case from DI
        jwt_service: Token verifier from DI
        token: Identity token
        user_id: Only entries by this user
        action: Only entries with this action
        page: 1-based page number
        limit: Page size

    Returns:
        One page of entries with totals
    """
    actor = require_actor(jwt_service, token, "view the activity log")
    return await get_activity_log_use_case.execute(
        GetActivityLogRequest(
            actor=actor, user_id=user_id, action=action, page=page, limit=limit
        )
    )


@router.get("/stats", response_model=GetDashboardStatsResponse)
async def get_dashboard_stats(
    get_dashboard_stats_use_case: FromDishka[GetDashboardStatsUseCase],
    jwt_service: FromDishka[JWTService],
    token: str | None = Depends(read_token),
) -> GetDashboardStatsResponse:
    """Thread totals and the last 24 hours of activity. Admins only."""
    actor = require_actor(jwt_service, token, "view dashboard stats")
    return await get_dashboard_stats_use_case.execute(
        GetDashboardStatsRequest(actor=actor)
    )
