"""
Browser route resolution for the client router.
"""

from fastapi import APIRouter, Depends, Query, status
from typing import Optional
from stayhub.models.profile import Profile
from stayhub.schemas.navigation import RouteDecisionResponse, AdminMenuResponse
from stayhub.utils.dependencies import get_optional_current_user, get_current_staff_user
from stayhub.utils.route_guard import resolve_route, admin_menu, normalize_path


router = APIRouter(prefix="/navigation", tags=["Navigation"])


@router.get(
    "/resolve",
    response_model=RouteDecisionResponse,
    status_code=status.HTTP_200_OK,
    summary="Resolve a browser path",
    description="allow, redirect (with target) or not_found for the caller's session"
)
async def resolve(
    path: str = Query(..., description="Browser path such as /admin/users"),
    current_user: Optional[Profile] = Depends(get_optional_current_user)
) -> RouteDecisionResponse:
    decision = resolve_route(
        path,
        authenticated=current_user is not None,
        roles=current_user.roles if current_user else []
    )
    return RouteDecisionResponse(
        path=normalize_path(path),
        route=decision.route.name if decision.route else None,
        outcome=decision.outcome.value,
        redirect_to=decision.redirect_to
    )


@router.get(
    "/admin",
    response_model=AdminMenuResponse,
    status_code=status.HTTP_200_OK,
    summary="Admin side menu",
    description="Menu items for the admin layout; Users is shown to admins only"
)
async def admin_navigation(current_user: Profile = Depends(get_current_staff_user)) -> AdminMenuResponse:
    return AdminMenuResponse(items=admin_menu(current_user.roles))
