"""Resolve principals from stored users, role assignments and entitlements."""

from typing import Dict, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from libris.core.rbac import Grant, Principal, RoleGrant
from libris.db.models import Role, RoleEntitlement, User, UserInRole


def load_principal(db: Session, user_id: UUID) -> Optional[Principal]:
    """
    Build the principal for a user.

    Returns None if the user does not exist or is inactive. Assignments to
    roles that no longer exist are ignored.
    """
    user = db.get(User, user_id)
    if user is None or user.is_active is False:
        return None

    rows = (
        db.query(Role.id, Role.name, RoleEntitlement.resource, RoleEntitlement.entitlement)
        .join(UserInRole, UserInRole.role_id == Role.id)
        .outerjoin(RoleEntitlement, RoleEntitlement.role_id == Role.id)
        .filter(UserInRole.user_id == user.id)
        .all()
    )

    names: Dict[UUID, str] = {}
    grants: Dict[UUID, set] = {}
    for role_id, role_name, resource, entitlement in rows:
        names[role_id] = role_name
        role_grants = grants.setdefault(role_id, set())
        if resource is not None and entitlement is not None:
            role_grants.add(Grant.of(resource, entitlement))

    roles = tuple(
        RoleGrant(role_id=role_id, name=names[role_id], entitlements=frozenset(grants[role_id]))
        for role_id in names
    )
    return Principal(user_id=user.id, user_name=user.user_name, roles=roles)
