import uuid
from sqlalchemy import Column, String, Uuid
from sqlalchemy.orm import relationship

from libris.db.base import Base
from libris.core.records import FieldSpec, FieldType, RecordSchema


class Role(Base):
    __tablename__ = "roles"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False, unique=True)
    description = Column(String(500))

    # Relationships
    entitlements = relationship("RoleEntitlement", back_populates="role", cascade="all, delete-orphan")
    assignments = relationship("UserInRole", back_populates="role", cascade="all, delete-orphan")


ROLE_SCHEMA = RecordSchema(
    name="Role",
    model=Role,
    fields=(
        FieldSpec("Id", "id", FieldType.UUID),
        FieldSpec("Name", "name", FieldType.STRING, required=True),
        FieldSpec("Description", "description", FieldType.STRING),
    ),
)
