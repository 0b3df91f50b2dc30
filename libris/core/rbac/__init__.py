"""Entitlement-based authorization for Libris.

This module defines the entitlement model, principals, default roles and
the authorization checks every endpoint goes through.
"""

from .entitlements import (
    Entitlement,
    Grant,
    Operation,
    ENDPOINT_POLICY,
    RESOURCE_NAMES,
    required_entitlement,
)
from .principal import Principal, RoleGrant, build_role
from .checker import EntitlementChecker, authorize, is_authorized

__all__ = [
    "Entitlement",
    "Grant",
    "Operation",
    "ENDPOINT_POLICY",
    "RESOURCE_NAMES",
    "required_entitlement",
    "Principal",
    "RoleGrant",
    "build_role",
    "EntitlementChecker",
    "authorize",
    "is_authorized",
]
