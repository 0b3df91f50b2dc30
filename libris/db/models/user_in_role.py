import uuid
from sqlalchemy import Column, ForeignKey, Uuid
from sqlalchemy.orm import relationship

from libris.db.base import Base
from libris.core.records import FieldSpec, FieldType, RecordSchema


class UserInRole(Base):
    """Assigns one role to one user."""

    __tablename__ = "user_in_roles"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    role_id = Column(Uuid, ForeignKey("roles.id"), nullable=False, index=True)

    # Relationships
    user = relationship("User", back_populates="role_assignments")
    role = relationship("Role", back_populates="assignments")


USER_IN_ROLE_SCHEMA = RecordSchema(
    name="UserInRole",
    model=UserInRole,
    fields=(
        FieldSpec("Id", "id", FieldType.UUID),
        FieldSpec("UserId", "user_id", FieldType.UUID, required=True),
        FieldSpec("RoleId", "role_id", FieldType.UUID, required=True),
    ),
)
