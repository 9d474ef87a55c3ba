import pytest

from backoffice.contracts.user import UserRole
from backoffice.permissions import AccessGate, AccessState, resolve_permissions

FLAGS = (
    "is_admin", "is_super_admin", "is_partner", "is_premium", "is_user", "is_guest", "is_support",
    "can_access_admin_panel", "can_view_user_list", "can_edit_user_role", "can_manage_users",
    "can_manage_products", "can_manage_orders", "can_view_reports",
)

# One row per role, columns in FLAGS order.
CAPABILITIES = [
    ("guest",      (0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0, 0)),
    ("user",       (0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0, 0, 0)),
    ("premium",    (0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0)),
    ("partner",    (0, 0, 1, 0, 0, 0, 0, 0, 0, 0, 0, 1, 0, 0)),
    ("support",    (0, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 1, 0)),
    ("admin",      (1, 0, 0, 0, 0, 0, 0, 1, 1, 0, 0, 1, 1, 1)),
    ("superadmin", (1, 1, 0, 0, 0, 0, 0, 1, 1, 1, 1, 1, 1, 1)),
]


@pytest.mark.parametrize("role, row", CAPABILITIES)
def test_capabilities_per_role(role, row):
    expected = {"user_role": UserRole(role), **{flag: bool(v) for flag, v in zip(FLAGS, row)}}
    assert resolve_permissions(role).as_dict() == expected


def test_table_covers_every_role():
    assert {role for role, _ in CAPABILITIES} == {r.value for r in UserRole}


@pytest.mark.parametrize("role", [None, "", "root", 42])
def test_unknown_roles_are_guests(role):
    permissions = resolve_permissions(role)
    assert permissions.user_role == UserRole.GUEST
    assert permissions.is_guest
    assert not permissions.can_access_admin_panel


def test_gate_settles_once():
    gate = AccessGate()
    assert gate.state == AccessState.LOADING
    assert gate.resolve("admin") == AccessState.GRANTED
    # A later answer does not flip a settled gate.
    assert gate.resolve("guest") == AccessState.GRANTED


def test_gate_denies_non_admins_and_failed_lookups():
    assert AccessGate().resolve("user") == AccessState.DENIED
    assert AccessGate().resolve(None) == AccessState.DENIED


def test_gate_refresh_returns_to_loading():
    gate = AccessGate()
    gate.resolve("user")
    gate.refresh()
    assert gate.state == AccessState.LOADING
    assert gate.permissions is None
    assert gate.resolve("superadmin") == AccessState.GRANTED


def test_gate_fallback_role_is_configurable(monkeypatch):
    monkeypatch.setattr("backoffice.config.FALLBACK_ROLE", "admin")
    assert AccessGate().resolve(None) == AccessState.GRANTED
