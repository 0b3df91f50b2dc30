"""Default role definitions for Libris.

1. Administrator - every entitlement on every resource
2. Reader - read-only access to every resource
"""

from typing import Dict, List

from .entitlements import Entitlement, Grant, RESOURCE_NAMES, grants_for_resource


def _build_grants(*actions: Entitlement) -> List[Grant]:
    """Build grants for ``actions`` on every known resource."""
    return [Grant.of(resource, action) for resource in RESOURCE_NAMES for action in actions]


ADMINISTRATOR_GRANTS = [g for resource in RESOURCE_NAMES for g in grants_for_resource(resource)]

READER_GRANTS = _build_grants(Entitlement.READ)


DEFAULT_ROLES: Dict[str, dict] = {
    "administrator": {
        "name": "Administrator",
        "description": "Full access to every resource",
        "grants": ADMINISTRATOR_GRANTS,
    },
    "reader": {
        "name": "Reader",
        "description": "Read-only access to every resource",
        "grants": READER_GRANTS,
    },
}
