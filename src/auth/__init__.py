"""Authentication helpers.

    from src.auth import login, logout, get_current_user, allowed_views
"""

from .manager import (  # noqa: F401
    MOCK_USERS,
    NAV_ITEMS,
    allowed_views,
    can_edit,
    get_current_user,
    has_permission,
    login,
    logout,
    role_label,
)

__all__ = [
    "MOCK_USERS",
    "NAV_ITEMS",
    "allowed_views",
    "can_edit",
    "get_current_user",
    "has_permission",
    "login",
    "logout",
    "role_label",
]
