import uuid
from sqlalchemy import Column, String, Enum, ForeignKey, Uuid
from sqlalchemy.orm import relationship

from libris.db.base import Base
from libris.core.rbac.entitlements import Entitlement
from libris.core.records import FieldSpec, FieldType, RecordSchema


class RoleEntitlement(Base):
    """Grants one action on one named resource to one role."""

    __tablename__ = "role_entitlements"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    role_id = Column(Uuid, ForeignKey("roles.id"), nullable=False, index=True)
    resource = Column(String(100), nullable=False)
    entitlement = Column(
        Enum(
            Entitlement,
            name="entitlement",
            native_enum=False,
            values_callable=lambda members: [m.value for m in members],
        ),
        nullable=False,
    )

    # Relationships
    role = relationship("Role", back_populates="entitlements")


ROLE_ENTITLEMENT_SCHEMA = RecordSchema(
    name="RoleEntitlement",
    model=RoleEntitlement,
    fields=(
        FieldSpec("Id", "id", FieldType.UUID),
        FieldSpec("RoleId", "role_id", FieldType.UUID, required=True),
        FieldSpec("Resource", "resource", FieldType.STRING, required=True),
        FieldSpec("Entitlement", "entitlement", FieldType.ENUM, required=True, enum=Entitlement),
    ),
)
