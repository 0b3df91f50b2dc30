"""Entitlement model for Libris.

An entitlement grant is a ``(resource, action)`` pair held by a role.
Resource names are plain, case-sensitive strings matching record type
names; there are no wildcards or resource hierarchies.

Grant string format: "Resource:Action"
Examples:
  - Books:Read
  - UserInRole:Create
"""

from enum import Enum
from typing import Dict, NamedTuple, Union


class Entitlement(str, Enum):
    """Actions a role can be entitled to."""

    CREATE = "Create"
    READ = "Read"
    UPDATE = "Update"
    DELETE = "Delete"


class Operation(str, Enum):
    """Endpoint operations exposed for every resource."""

    CREATE = "create"
    LIST = "list"
    GET = "get"
    UPDATE = "update"
    DELETE = "delete"


# Resources served by the API
AUTHOR = "Author"
BOOKS = "Books"
ROLE = "Role"
ROLE_ENTITLEMENT = "RoleEntitlement"
USER = "User"
USER_IN_ROLE = "UserInRole"

RESOURCE_NAMES = (AUTHOR, BOOKS, ROLE, ROLE_ENTITLEMENT, USER, USER_IN_ROLE)


class Grant(NamedTuple):
    """A single entitlement on a single resource."""
    resource: str
    action: Entitlement

    def __str__(self) -> str:
        return f"{self.resource}:{self.action.value}"

    @classmethod
    def of(cls, resource: str, action: Union[str, Entitlement]) -> "Grant":
        """Build a grant, normalising ``action`` to an :class:`Entitlement`.

        Grants are compared in sets, so the action must always be the enum
        member and never its raw string value.
        """
        return cls(str(resource), Entitlement(action))


# Which entitlement each endpoint operation requires
ENDPOINT_POLICY: Dict[Operation, Entitlement] = {
    Operation.CREATE: Entitlement.CREATE,
    Operation.LIST: Entitlement.READ,
    Operation.GET: Entitlement.READ,
    Operation.UPDATE: Entitlement.UPDATE,
    Operation.DELETE: Entitlement.DELETE,
}


def required_entitlement(operation: Operation) -> Entitlement:
    """Get the entitlement an endpoint operation is gated on."""
    return ENDPOINT_POLICY[Operation(operation)]


def grants_for_resource(resource: str) -> list[Grant]:
    """Get every grant that can exist on a resource."""
    return [Grant.of(resource, action) for action in Entitlement]
