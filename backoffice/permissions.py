"""
Role based access

Capabilities are a pure function of the role. The access gate is a small
state machine: LOADING until the role is known, then GRANTED or DENIED until
explicitly refreshed.
"""
from dataclasses import asdict, dataclass
from enum import Enum

from backoffice import config
from backoffice.contracts.user import UserRole

ADMINS = frozenset({UserRole.ADMIN, UserRole.SUPERADMIN})


@dataclass(frozen=True)
class Permissions:
    user_role: UserRole
    is_admin: bool
    is_super_admin: bool
    is_partner: bool
    is_premium: bool
    is_user: bool
    is_guest: bool
    is_support: bool
    can_access_admin_panel: bool
    can_view_user_list: bool
    can_edit_user_role: bool
    can_manage_users: bool
    can_manage_products: bool
    can_manage_orders: bool
    can_view_reports: bool

    def as_dict(self):
        return asdict(self)


def resolve_permissions(role) -> Permissions:
    role = UserRole.parse(role)
    return Permissions(
        user_role=role,
        is_admin=role in ADMINS,
        is_super_admin=role == UserRole.SUPERADMIN,
        is_partner=role == UserRole.PARTNER,
        is_premium=role == UserRole.PREMIUM,
        is_user=role == UserRole.USER,
        is_guest=role == UserRole.GUEST,
        is_support=role == UserRole.SUPPORT,
        can_access_admin_panel=role in ADMINS,
        can_view_user_list=role in ADMINS,
        can_edit_user_role=role == UserRole.SUPERADMIN,
        can_manage_users=role == UserRole.SUPERADMIN,
        can_manage_products=role in ADMINS | {UserRole.PARTNER},
        can_manage_orders=role in ADMINS | {UserRole.SUPPORT},
        can_view_reports=role in ADMINS,
    )


def fallback_role() -> UserRole:
    return UserRole.parse(config.FALLBACK_ROLE)


class AccessState(str, Enum):
    LOADING = "loading"
    GRANTED = "granted"
    DENIED = "denied"


class AccessGate:
    def __init__(self, capability: str = "can_access_admin_panel"):
        self.capability = capability
        self.state = AccessState.LOADING
        self.permissions = None

    def resolve(self, role) -> AccessState:
        """Settle a loading gate. ``role`` None means the lookup failed."""
        if self.state != AccessState.LOADING:
            return self.state
        self.permissions = resolve_permissions(role if role is not None else fallback_role())
        allowed = getattr(self.permissions, self.capability)
        self.state = AccessState.GRANTED if allowed else AccessState.DENIED
        return self.state

    def refresh(self):
        self.state = AccessState.LOADING
        self.permissions = None
