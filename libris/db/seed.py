"""Database seeding for Libris.

Creates the default roles with their entitlements and bootstraps an
administrator account.
"""

from typing import Optional

from sqlalchemy.orm import Session

from libris.core.rbac.roles import DEFAULT_ROLES
from libris.db.models import Role, RoleEntitlement, User, UserInRole


def seed_default_roles(db: Session) -> dict[str, Role]:
    """
    Create the default roles and their entitlements.

    Idempotent: existing roles are returned as they are and missing
    entitlements are added.

    Returns:
        Dict mapping role key to Role object
    """
    created_roles = {}

    for role_key, role_config in DEFAULT_ROLES.items():
        role = db.query(Role).filter(Role.name == role_config["name"]).first()
        if role is None:
            role = Role(name=role_config["name"], description=role_config["description"])
            db.add(role)
            db.flush()

        existing = {
            (e.resource, e.entitlement)
            for e in db.query(RoleEntitlement).filter(RoleEntitlement.role_id == role.id)
        }
        for grant in role_config["grants"]:
            if (grant.resource, grant.action) not in existing:
                db.add(RoleEntitlement(role_id=role.id, resource=grant.resource, entitlement=grant.action))

        created_roles[role_key] = role

    db.flush()
    return created_roles


def assign_role(db: Session, user: User, role: Role) -> UserInRole:
    """Assign a role to a user unless it is already assigned."""
    assignment = db.query(UserInRole).filter(
        UserInRole.user_id == user.id,
        UserInRole.role_id == role.id,
    ).first()
    if assignment is None:
        assignment = UserInRole(user_id=user.id, role_id=role.id)
        db.add(assignment)
        db.flush()
    return assignment


def seed_admin_user(
    db: Session,
    user_name: str,
    email: str,
    *,
    full_name: Optional[str] = None,
) -> User:
    """
    Create (or reuse) a user and give it the Administrator role.

    Seeds the default roles first if they are missing.
    """
    roles = seed_default_roles(db)

    user = db.query(User).filter(User.user_name == user_name).first()
    if user is None:
        user = User(user_name=user_name, email=email, full_name=full_name, is_active=True)
        db.add(user)
        db.flush()

    assign_role(db, user, roles["administrator"])
    return user


def get_role_by_name(db: Session, name: str) -> Optional[Role]:
    """Get a role by name."""
    return db.query(Role).filter(Role.name == name).first()
