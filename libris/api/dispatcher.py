"""Generic resource endpoints.

Every registered resource gets the same five endpoints. Each one is gated
by the entitlement its operation requires, then delegates to the filter or
merge engine and the record store.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from libris.api.deps import get_db, require_entitlement
from libris.api.resources import ResourceSpec
from libris.core.errors import IdentityMismatch, NotFound
from libris.core.filters import apply_filter, parse_filters
from libris.core.logger import get_logger
from libris.core.merge import changed_fields, merge
from libris.core.rbac import Operation, Principal
from libris.db.store import RecordStore

logger = get_logger(__name__)

FILTERS_DESCRIPTION = (
    "The filter criteria in JSON format. Use the following format: "
    '[{"Property": "PropertyName", "Operator": "Equal", "Value": "FilterValue"}]'
)


def build_resource_router(resource: ResourceSpec) -> APIRouter:
    """Create the create/list/get/update/delete router for one resource."""
    schema = resource.schema
    Record = resource.record_model
    name = resource.name
    label = resource.label

    router = APIRouter(prefix=f"/{resource.route}", tags=[resource.route])

    @router.post("", response_model=int, summary=f"Add a new {label}")
    def create_record(
        payload: Record,
        db: Session = Depends(get_db),
        principal: Principal = Depends(require_entitlement(name, Operation.CREATE)),
    ):
        store = RecordStore(db, schema.model)
        record = schema.new_record(payload)
        store.add(record)
        count = store.commit()
        logger.info("%s created %s %s", principal.user_name, name, schema.identity_of(record))
        return count

    @router.get("", response_model=List[Record], summary=f"List {label} records")
    def list_records(
        filters: Optional[str] = Query(None, description=FILTERS_DESCRIPTION),
        db: Session = Depends(get_db),
        principal: Principal = Depends(require_entitlement(name, Operation.LIST)),
    ):
        conditions = parse_filters(filters)
        query = apply_filter(RecordStore(db, schema.model).query(), conditions, schema)
        return [Record.model_validate(record) for record in query.all()]

    @router.get("/{entity_id}", response_model=Record, summary=f"Get a {label} by id")
    def get_record(
        entity_id: UUID,
        db: Session = Depends(get_db),
        principal: Principal = Depends(require_entitlement(name, Operation.GET)),
    ):
        record = RecordStore(db, schema.model).get(entity_id)
        if record is None:
            raise NotFound(name, entity_id)
        return Record.model_validate(record)

    @router.put("/{entity_id}", response_model=int, summary=f"Update a {label} by id")
    def update_record(
        entity_id: UUID,
        payload: Record,
        db: Session = Depends(get_db),
        principal: Principal = Depends(require_entitlement(name, Operation.UPDATE)),
    ):
        payload_id = schema.identity_of(payload)
        if payload_id != entity_id:
            raise IdentityMismatch(entity_id, payload_id)

        store = RecordStore(db, schema.model)
        record = store.get(entity_id)
        if record is None:
            raise NotFound(name, entity_id)

        logger.debug("Updating %s %s fields %s", name, entity_id, changed_fields(record, payload, schema))
        merge(record, payload, schema)
        count = store.commit()
        logger.info("%s updated %s %s", principal.user_name, name, entity_id)
        return count

    @router.delete("/{entity_id}", response_model=int, summary=f"Delete a {label} by id")
    def delete_record(
        entity_id: UUID,
        db: Session = Depends(get_db),
        principal: Principal = Depends(require_entitlement(name, Operation.DELETE)),
    ):
        store = RecordStore(db, schema.model)
        record = store.get(entity_id)
        if record is None:
            raise NotFound(name, entity_id)

        store.remove(record)
        count = store.commit()
        logger.info("%s deleted %s %s", principal.user_name, name, entity_id)
        return count

    return router
