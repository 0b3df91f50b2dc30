import uuid
from sqlalchemy import Column, String, Numeric, Date, Boolean, ForeignKey, Uuid
from sqlalchemy.orm import relationship

from libris.db.base import Base
from libris.core.records import FieldSpec, FieldType, RecordSchema


class Book(Base):
    __tablename__ = "books"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False, index=True)
    author_id = Column(Uuid, ForeignKey("authors.id"), nullable=True)
    isbn = Column(String(20))
    price = Column(Numeric(10, 2))
    published_on = Column(Date)
    in_stock = Column(Boolean, default=True)

    # Relationships
    author = relationship("Author", back_populates="books")


BOOKS_SCHEMA = RecordSchema(
    name="Books",
    model=Book,
    fields=(
        FieldSpec("Id", "id", FieldType.UUID),
        FieldSpec("Title", "title", FieldType.STRING, required=True),
        FieldSpec("AuthorId", "author_id", FieldType.UUID),
        FieldSpec("Isbn", "isbn", FieldType.STRING),
        FieldSpec("Price", "price", FieldType.DECIMAL),
        FieldSpec("PublishedOn", "published_on", FieldType.DATE),
        FieldSpec("InStock", "in_stock", FieldType.BOOLEAN),
    ),
)
