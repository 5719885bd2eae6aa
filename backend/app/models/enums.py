"""
User roles enumeration.

Defines the role types for the transport management system.
"""

import enum


class UserRole(str, enum.Enum):
    """
    User role enumeration.

    Roles:
        ADMIN: Oversees trips, users and disputes across branches
        FINANCE: Manages ledger top-ups, payments and settlements
        AGENT: Creates and runs trips for a branch (default role)
    """
    ADMIN = "Admin"
    FINANCE = "Finance"
    AGENT = "Agent"
