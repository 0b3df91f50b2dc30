"""Partial update engine.

Copies every non-identity field of an incoming record onto a stored record.
The copy is unconditional: ``None`` and default values overwrite what is
stored, so an update is a full replace of everything except the identity.
"""

from typing import Any, List, TypeVar

from libris.core.errors import IdentityMismatch
from libris.core.logger import get_logger
from libris.core.records import RecordSchema

logger = get_logger(__name__)

T = TypeVar("T")


def merge(stored: T, incoming: Any, schema: RecordSchema) -> T:
    """Merge ``incoming`` into ``stored`` field by field.

    ``incoming`` may be any object exposing the schema's attributes (a
    stored record or a request payload model). The identity field is never
    written.

    Raises:
        IdentityMismatch: the two records have different identities
    """
    stored_id = schema.identity_of(stored)
    incoming_id = schema.identity_of(incoming)
    if stored_id != incoming_id:
        raise IdentityMismatch(stored_id, incoming_id)

    for spec in schema.mutable_fields:
        spec.write(stored, spec.read(incoming))

    logger.debug("Merged %d field(s) into %s %s", len(schema.mutable_fields), schema.name, stored_id)
    return stored


def changed_fields(stored: Any, incoming: Any, schema: RecordSchema) -> List[str]:
    """List the wire names of non-identity fields whose values differ."""
    return [
        spec.name
        for spec in schema.mutable_fields
        if spec.read(stored) != spec.read(incoming)
    ]
