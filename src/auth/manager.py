"""Session helpers for the PharmaControl login screen.

Users come from a fixed lookup table; there is no credential verification.
The current user is kept in a caller-supplied session mapping (Streamlit's
``st.session_state`` in the app, a plain ``dict`` in tests) so these helpers
stay UI-agnostic.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, MutableMapping, Optional, Tuple

from src.inventory.models import Role, User

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Paths / constants
# ---------------------------------------------------------------------------

SESSION_KEY = "pharma_user"

MOCK_USERS: Tuple[User, ...] = (
    User(username="admin", name="Administrador Principal", role=Role.ADMIN),
    User(username="pharma", name="Regente de Farmacia", role=Role.PHARMACIST),
    User(username="viewer", name="Auditor Financiero", role=Role.VIEWER),
)

ALL_ROLES = (Role.ADMIN, Role.PHARMACIST, Role.VIEWER)
EDITOR_ROLES = (Role.ADMIN, Role.PHARMACIST)


@dataclass(frozen=True)
class NavItem:
    id: str
    label: str
    icon: str
    allowed_roles: Tuple[Role, ...]


NAV_ITEMS: Tuple[NavItem, ...] = (
    NavItem("dashboard", "Dashboard", "📊", ALL_ROLES),
    NavItem("products", "Productos", "💊", EDITOR_ROLES),
    NavItem("scan", "Escáner", "📷", EDITOR_ROLES),
    NavItem("regulatory", "Asistente Legal", "⚖️", ALL_ROLES),
)


# ---------------------------------------------------------------------------
# Public helper functions
# ---------------------------------------------------------------------------

def find_user(username: str) -> Optional[User]:
    wanted = username.strip().lower()
    for user in MOCK_USERS:
        if user.username.lower() == wanted:
            return user
    return None


def login(username: str, session: MutableMapping) -> Optional[User]:
    """Look up *username* (case-insensitive) and store it in *session*."""
    user = find_user(username)
    if user is None:
        logger.info("Rejected login for unknown user %r", username)
        return None
    session[SESSION_KEY] = user
    logger.info("User %s logged in as %s", user.username, user.role.value)
    return user


def logout(session: MutableMapping) -> None:
    session.pop(SESSION_KEY, None)


def get_current_user(session: MutableMapping) -> Optional[User]:
    return session.get(SESSION_KEY)


def has_permission(user: User, required_roles: Iterable[Role]) -> bool:
    return user.role in tuple(required_roles)


def can_edit(user: User) -> bool:
    return has_permission(user, EDITOR_ROLES)


def allowed_views(user: User) -> List[NavItem]:
    """Navigation entries visible to *user*, in menu order."""
    return [item for item in NAV_ITEMS if has_permission(user, item.allowed_roles)]


def role_label(role: Role) -> str:
    return "Regente" if role is Role.PHARMACIST else role.value.capitalize()
