"""Entitlement checking for Libris.

Resolution walks principal → roles → entitlements and allows the request
iff any assigned role holds the exact ``(resource, action)`` grant. The
check is resource-type scoped: it never looks at individual records.
"""

from typing import Iterable, List, Optional, Union

from libris.core.errors import Forbidden, Unauthenticated
from libris.core.logger import get_logger

from .entitlements import Entitlement, Grant, RESOURCE_NAMES
from .principal import Principal

logger = get_logger(__name__)


class EntitlementChecker:
    """Checks whether a principal holds specific entitlements."""

    def __init__(self, principal: Principal):
        self.principal = principal
        self.grants = principal.grants

    def has_entitlement(self, resource: str, action: Union[str, Entitlement]) -> bool:
        """Check if any assigned role grants ``action`` on ``resource``."""
        return Grant.of(resource, action) in self.grants

    def has_any(self, grants: Iterable[Grant]) -> bool:
        return any(self.has_entitlement(g.resource, g.action) for g in grants)

    def has_all(self, grants: Iterable[Grant]) -> bool:
        return all(self.has_entitlement(g.resource, g.action) for g in grants)

    def granted_actions(self, resource: str) -> List[Entitlement]:
        """Get the actions the principal may perform on ``resource``."""
        return [action for action in Entitlement if self.has_entitlement(resource, action)]

    def accessible_resources(self, action: Union[str, Entitlement]) -> List[str]:
        """Get the known resources the principal may perform ``action`` on."""
        return [r for r in RESOURCE_NAMES if self.has_entitlement(r, action)]


def is_authorized(
    principal: Optional[Principal],
    resource: str,
    action: Union[str, Entitlement],
) -> bool:
    """
    Check if a principal may perform ``action`` on ``resource``.

    Args:
        principal: The caller, or None if no identity could be resolved
        resource: Resource name, matched exactly
        action: Required entitlement

    Returns:
        True if at least one assigned role holds the matching entitlement
    """
    if principal is None or not principal.roles:
        return False
    return EntitlementChecker(principal).has_entitlement(resource, action)


def authorize(
    principal: Optional[Principal],
    resource: str,
    action: Union[str, Entitlement],
) -> Principal:
    """
    Require that ``principal`` holds ``action`` on ``resource``.

    Returns:
        The authorized principal

    Raises:
        Unauthenticated: no principal could be resolved
        Forbidden: the principal lacks the entitlement
    """
    if principal is None:
        raise Unauthenticated()

    action = Entitlement(action)
    if not is_authorized(principal, resource, action):
        logger.warning(
            "Denied %s on %s for user %s", action.value, resource, principal.user_id
        )
        raise Forbidden(resource, action.value)

    return principal
