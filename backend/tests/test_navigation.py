"""
Navigation policy tests.
"""

import pytest

from backend.app.core.navigation import normalize_role, route_for
from backend.app.models.enums import UserRole


@pytest.mark.parametrize("role, expected", [
    ("Admin", "/admin/trips/T9"),
    ("Finance", "/finance/trips/T9"),
    ("Agent", "/agent/trips/T9"),
    (UserRole.FINANCE, "/finance/trips/T9"),
])
def test_route_per_role(role, expected):
    assert route_for(role, "T9") == expected


@pytest.mark.parametrize("role", [None, "", "SuperAdmin", "finance", "Doctor"])
def test_unknown_role_defaults_to_agent_route(role):
    """Roles are case sensitive; anything unrecognised gets the Agent route."""
    assert route_for(role, "T9") == "/agent/trips/T9"
    assert normalize_role(role) == UserRole.AGENT
