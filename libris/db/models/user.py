import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, Boolean, Uuid
from sqlalchemy.orm import relationship

from libris.db.base import Base
from libris.core.records import FieldSpec, FieldType, RecordSchema


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_name = Column(String(100), unique=True, nullable=False, index=True)
    email = Column(String(255), nullable=False)
    full_name = Column(String(255))
    is_active = Column(Boolean, default=True)
    created_on = Column(DateTime, default=_utcnow)

    # Relationships
    role_assignments = relationship("UserInRole", back_populates="user", cascade="all, delete-orphan")


USER_SCHEMA = RecordSchema(
    name="User",
    model=User,
    fields=(
        FieldSpec("Id", "id", FieldType.UUID),
        FieldSpec("UserName", "user_name", FieldType.STRING, required=True),
        FieldSpec("Email", "email", FieldType.STRING, required=True),
        FieldSpec("FullName", "full_name", FieldType.STRING),
        FieldSpec("IsActive", "is_active", FieldType.BOOLEAN),
        FieldSpec("CreatedOn", "created_on", FieldType.DATETIME),
    ),
)
