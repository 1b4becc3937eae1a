"""Unit tests for the mock login and role permissions."""

import pytest

from src.auth import (
    MOCK_USERS,
    allowed_views,
    can_edit,
    get_current_user,
    has_permission,
    login,
    logout,
    role_label,
)
from src.auth.manager import SESSION_KEY
from src.inventory.models import Role


def _user(username):
    return next(u for u in MOCK_USERS if u.username == username)


class TestLogin:
    def test_login_is_case_insensitive(self):
        session = {}
        user = login("ADMIN", session)
        assert user.name == "Administrador Principal"
        assert get_current_user(session) is user
        assert session[SESSION_KEY] is user

    def test_unknown_user(self):
        session = {}
        assert login("intruso", session) is None
        assert get_current_user(session) is None

    def test_logout_clears_session(self):
        session = {}
        login("pharma", session)
        logout(session)
        assert get_current_user(session) is None
        logout(session)  # idempotent


class TestPermissions:
    @pytest.mark.parametrize(
        "username, views",
        [
            ("admin", ["dashboard", "products", "scan", "regulatory"]),
            ("pharma", ["dashboard", "products", "scan", "regulatory"]),
            ("viewer", ["dashboard", "regulatory"]),
        ],
    )
    def test_allowed_views(self, username, views):
        assert [item.id for item in allowed_views(_user(username))] == views

    def test_can_edit(self):
        assert can_edit(_user("admin"))
        assert can_edit(_user("pharma"))
        assert not can_edit(_user("viewer"))

    def test_has_permission(self):
        assert has_permission(_user("viewer"), [Role.VIEWER])
        assert not has_permission(_user("viewer"), [Role.ADMIN, Role.PHARMACIST])

    def test_role_label(self):
        assert role_label(Role.PHARMACIST) == "Regente"
        assert role_label(Role.ADMIN) == "Admin"
