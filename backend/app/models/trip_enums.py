"""
Trip-related enumerations.
"""

import enum


class TripStatus(str, enum.Enum):
    """Trip status enumeration."""
    ACTIVE = "Active"  # Trip running, agent can draw top-ups
    COMPLETED = "Completed"  # Trip closed and settled
    PENDING = "Pending"  # Created, awaiting dispatch
    DISPUTE = "Dispute"  # Under dispute


class LRSheetStatus(str, enum.Enum):
    """Physical LR sheet receipt status."""
    RECEIVED = "Received"
    NOT_RECEIVED = "Not Received"
