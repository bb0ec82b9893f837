"""
Role-gated route resolution for the browser routing surface.
The same ordered checks back the admin API dependencies.
"""

from typing import List, Optional, Sequence
import enum
import re

from stayhub.models.profile import AppRole


class RouteAccess(str, enum.Enum):
    """Who may open a route."""
    PUBLIC = "public"
    STAFF = "staff"
    ADMIN = "admin"


class GuardOutcome(str, enum.Enum):
    """Result of evaluating the guard chain."""
    ALLOW = "allow"
    LOADING = "loading"
    REDIRECT = "redirect"
    NOT_FOUND = "not_found"


SIGN_IN_PATH = "/auth"
HOME_PATH = "/"
ADMIN_HOME_PATH = "/admin"


class Route:
    """Browser route with a path pattern such as /property/:id."""

    def __init__(self, pattern: str, name: str, access: RouteAccess = RouteAccess.PUBLIC):
        self.pattern = pattern
        self.name = name
        self.access = access
        regex = re.sub(r":[A-Za-z_]+", r"[^/]+", pattern)
        self._regex = re.compile(f"^{regex}$")

    def matches(self, path: str) -> bool:
        return bool(self._regex.match(path))


ROUTES: List[Route] = [
    Route("/", "home"),
    Route("/rentals", "rentals"),
    Route("/airbnb", "short_stays"),
    Route("/property/:id", "property_detail"),
    Route("/auth", "auth"),
    Route("/admin", "admin_dashboard", RouteAccess.STAFF),
    Route("/admin/properties", "admin_properties", RouteAccess.STAFF),
    Route("/admin/properties/new", "admin_property_new", RouteAccess.STAFF),
    Route("/admin/properties/:id/edit", "admin_property_edit", RouteAccess.STAFF),
    Route("/admin/users", "admin_users", RouteAccess.ADMIN),
]

ADMIN_MENU = [
    {"href": "/admin", "label": "Dashboard"},
    {"href": "/admin/properties", "label": "Properties"},
    {"href": "/admin/users", "label": "Users"},
]


class GuardDecision:
    """What the client should do for a route."""

    def __init__(self, outcome: GuardOutcome, redirect_to: Optional[str] = None, route: Optional[Route] = None):
        self.outcome = outcome
        self.redirect_to = redirect_to
        self.route = route

    @property
    def allowed(self) -> bool:
        return self.outcome == GuardOutcome.ALLOW

    def __repr__(self) -> str:
        return f"<GuardDecision(outcome={self.outcome.value}, redirect_to={self.redirect_to})>"


def normalize_path(path: str) -> str:
    """Drop query string, fragment and trailing slash."""
    path = path.split("?", 1)[0].split("#", 1)[0] or "/"
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1:
        path = path.rstrip("/")
    return path


def match_route(path: str) -> Optional[Route]:
    normalized = normalize_path(path)
    for route in ROUTES:
        if route.matches(normalized):
            return route
    return None


def check_access(
    authenticated: bool,
    roles: Sequence[AppRole],
    require_admin: bool = False,
    loading: bool = False
) -> GuardDecision:
    """
    Ordered predicate chain for protected screens.

    1. session still resolving -> loading
    2. no session -> sign in
    3. neither admin nor realtor -> home
    4. admin required but only realtor -> admin dashboard
    """
    if loading:
        return GuardDecision(GuardOutcome.LOADING)

    if not authenticated:
        return GuardDecision(GuardOutcome.REDIRECT, SIGN_IN_PATH)

    is_admin = AppRole.ADMIN in roles
    is_realtor = AppRole.REALTOR in roles

    if not is_admin and not is_realtor:
        return GuardDecision(GuardOutcome.REDIRECT, HOME_PATH)

    if require_admin and not is_admin:
        return GuardDecision(GuardOutcome.REDIRECT, ADMIN_HOME_PATH)

    return GuardDecision(GuardOutcome.ALLOW)


def resolve_route(
    path: str,
    authenticated: bool,
    roles: Sequence[AppRole] = (),
    loading: bool = False
) -> GuardDecision:
    """Resolve a browser path for the given auth state."""
    route = match_route(path)
    if route is None:
        return GuardDecision(GuardOutcome.NOT_FOUND)

    if route.access == RouteAccess.PUBLIC:
        return GuardDecision(GuardOutcome.ALLOW, route=route)

    decision = check_access(
        authenticated,
        roles,
        require_admin=route.access == RouteAccess.ADMIN,
        loading=loading
    )
    decision.route = route
    return decision


def admin_menu(roles: Sequence[AppRole]) -> List[dict]:
    """Admin side menu; the users screen is hidden from non-admins."""
    is_admin = AppRole.ADMIN in roles
    return [item for item in ADMIN_MENU if item["href"] != "/admin/users" or is_admin]
