from typing import Callable, Generator, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from libris.db.session import SessionLocal
from libris.db.principals import load_principal
from libris.core.rbac import Operation, Principal, authorize, required_entitlement
from libris.core.security import decode_token

bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator:
    """Database session dependency."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_principal(
    db: Session = Depends(get_db),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[Principal]:
    """Resolve the caller from a bearer token. None if it cannot be resolved."""
    if credentials is None:
        return None

    user_id = decode_token(credentials.credentials)
    if user_id is None:
        return None

    return load_principal(db, user_id)


def require_entitlement(resource: str, operation: Operation) -> Callable[..., Principal]:
    """
    Build a dependency gating an endpoint on the entitlement its operation needs.

    Usage:
        @router.delete("/{entity_id}")
        def delete_book(principal: Principal = Depends(require_entitlement("Books", Operation.DELETE))):
            ...
    """
    action = required_entitlement(operation)

    def dependency(
        principal: Optional[Principal] = Depends(get_current_principal),
    ) -> Principal:
        return authorize(principal, resource, action)

    return dependency
