"""The authenticated caller and the roles it holds."""

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Tuple
from uuid import UUID

from .entitlements import Grant


@dataclass(frozen=True)
class RoleGrant:
    """A role assigned to a principal, with the entitlements it carries."""

    role_id: UUID
    name: str
    entitlements: FrozenSet[Grant] = field(default_factory=frozenset)


@dataclass(frozen=True)
class Principal:
    """Snapshot of a user's identity and role assignments for one request."""

    user_id: UUID
    user_name: str
    roles: Tuple[RoleGrant, ...] = ()

    @property
    def grants(self) -> FrozenSet[Grant]:
        """Union of the entitlements of every assigned role."""
        result = set()
        for role in self.roles:
            result.update(role.entitlements)
        return frozenset(result)


def build_role(role_id: UUID, name: str, grants: Iterable[Tuple[str, str]]) -> RoleGrant:
    """Build a :class:`RoleGrant` from ``(resource, action)`` pairs."""
    return RoleGrant(
        role_id=role_id,
        name=name,
        entitlements=frozenset(Grant.of(resource, action) for resource, action in grants),
    )
