"""Role-based access to application sections."""

from enum import Enum

from ledgerbook.domain.errors import PermissionDeniedError


class Role(Enum):
    ADMIN = "admin"
    STAFF = "staff"
    VIEWER = "viewer"


class Section(Enum):
    DASHBOARD = "dashboard"
    TRANSACTIONS = "transactions"
    LEDGER = "ledger"
    ACCOUNTS = "accounts"
    RECONCILIATION = "reconciliation"
    ASSETS = "assets"
    REPORTS = "reports"
    SETTINGS = "settings"


ROLE_SECTIONS: dict[Role, frozenset[Section]] = {
    Role.ADMIN: frozenset(Section),
    Role.STAFF: frozenset(Section) - {Section.REPORTS, Section.SETTINGS},
    Role.VIEWER: frozenset({Section.DASHBOARD, Section.REPORTS}),
}

# Roles allowed to change stored data
WRITE_ROLES = frozenset({Role.ADMIN, Role.STAFF})


def parse_role(value: "str | Role") -> Role:
    """Parse a role name (case-insensitive)."""
    if isinstance(value, Role):
        return value
    try:
        return Role(str(value).strip().lower())
    except ValueError:
        valid = ", ".join(r.value for r in Role)
        raise ValueError(f"Unknown role '{value}'. Valid roles: {valid}") from None


def can_access(role: Role, section: Section) -> bool:
    return section in ROLE_SECTIONS[role]


def ensure_can_access(role: Role, section: Section) -> None:
    """Raise PermissionDeniedError unless the role may open the section."""
    if not can_access(role, section):
        raise PermissionDeniedError(
            f"Role '{role.value}' does not have access to {section.value}"
        )


def ensure_can_write(role: Role, section: Section) -> None:
    """Raise PermissionDeniedError unless the role may change data in the section."""
    ensure_can_access(role, section)
    if role not in WRITE_ROLES:
        raise PermissionDeniedError(
            f"Role '{role.value}' cannot modify {section.value}"
        )
