"""
Notification Schemas.

User feedback is rendered by the UI layer as toasts; this core only decides
the kind and the message.
"""

import enum


class NotificationKind(str, enum.Enum):
    """Toast kind."""
    SUCCESS = "success"
    INFO = "info"
    ERROR = "error"
