"""Record store: the persistence boundary the API dispatches through."""

from typing import Any, Optional, Type

from sqlalchemy.orm import Query, Session


class RecordStore:
    """Add/remove/commit access to the records of one model.

    ``query()`` returns a lazy SQLAlchemy query so filters are applied by
    the database rather than after loading every row.
    """

    def __init__(self, session: Session, model: Type):
        self.session = session
        self.model = model

    def query(self) -> Query:
        return self.session.query(self.model)

    def get(self, entity_id: Any) -> Optional[Any]:
        return self.session.get(self.model, entity_id)

    def add(self, record: Any) -> None:
        self.session.add(record)

    def remove(self, record: Any) -> None:
        self.session.delete(record)

    def pending_changes(self) -> int:
        """Count records that will be written by the next commit.

        Only records added, modified or removed through the session count.
        Rows the flush updates on their own behalf, such as books whose
        ``author_id`` is nulled when their author is deleted, are not
        included.
        """
        session = self.session
        modified = sum(1 for obj in session.dirty if session.is_modified(obj))
        return len(session.new) + modified + len(session.deleted)

    def commit(self) -> int:
        """Commit the unit of work and return :meth:`pending_changes` as it stood before."""
        changed = self.pending_changes()
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return changed
