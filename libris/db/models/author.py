import uuid
from sqlalchemy import Column, String, Integer, Date, Uuid
from sqlalchemy.orm import relationship

from libris.db.base import Base
from libris.core.records import FieldSpec, FieldType, RecordSchema


class Author(Base):
    __tablename__ = "authors"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False, index=True)
    year = Column(Integer, nullable=False)
    nationality = Column(String(100))
    birth_date = Column(Date)

    # Relationships
    books = relationship("Book", back_populates="author")


AUTHOR_SCHEMA = RecordSchema(
    name="Author",
    model=Author,
    fields=(
        FieldSpec("Id", "id", FieldType.UUID),
        FieldSpec("Name", "name", FieldType.STRING, required=True),
        FieldSpec("Year", "year", FieldType.INTEGER, required=True),
        FieldSpec("Nationality", "nationality", FieldType.STRING),
        FieldSpec("BirthDate", "birth_date", FieldType.DATE),
    ),
)
