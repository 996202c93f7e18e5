from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Display mode chosen on the client; not a permission."""

    USER = "user"
    ADMIN = "admin"


class Ache(str, Enum):
    BACK = "Back"
    LEG = "Leg"
    ARM = "Arm"


class Change(str, Enum):
    """Answer to "have you observed a change?" as stored on the wire."""

    IMPROVED = "Improved!"
    WORSENED = "Got worse!"
    NO_CHANGE = "No change!"


class ListScope(str, Enum):
    ALL = "all"
    OWNER = "owner"
