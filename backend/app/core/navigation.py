"""
Role-based navigation policy.

Maps a resolved trip and the current user's role to the trip detail route.
"""

from typing import Optional, Union

from backend.app.models.enums import UserRole

TRIP_ROUTE_PREFIXES = {
    UserRole.ADMIN: "/admin/trips",
    UserRole.FINANCE: "/finance/trips",
    UserRole.AGENT: "/agent/trips",
}

# Unknown or missing roles land on the Agent route, never on a dead link
DEFAULT_ROLE = UserRole.AGENT


def normalize_role(role: Optional[Union[UserRole, str]]) -> UserRole:
    """Convert a raw role to UserRole, defaulting to Agent."""
    if isinstance(role, UserRole):
        return role
    try:
        return UserRole(role)
    except ValueError:
        return DEFAULT_ROLE


def route_for(role: Optional[Union[UserRole, str]], trip_id: str) -> str:
    """
    Trip detail path for a role.

    Usage:
        route_for("Finance", "T9")  # "/finance/trips/T9"
    """
    return f"{TRIP_ROUTE_PREFIXES[normalize_role(role)]}/{trip_id}"
