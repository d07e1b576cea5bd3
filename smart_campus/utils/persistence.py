import json
import logging
from datetime import datetime
from typing import List
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from smart_campus.models.collection import StoredCollection
from smart_campus.utils.errors import PersistenceError

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


class CollectionStore:
    """
    Saves and loads whole collections of plain records under fixed names.

    Each save overwrites the previous blob for that name. The payload is
    opaque to the database: a JSON list tagged with a format version.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def load(self, name: str) -> List[dict]:
        db = self.session_factory()
        try:
            row = db.get(StoredCollection, name)
            if row is None:
                logger.debug(f"No saved collection '{name}', starting empty")
                return []
            version, payload = row.version, row.payload
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not read collection '{name}': {e}") from e
        finally:
            db.close()

        if version != FORMAT_VERSION:
            raise PersistenceError(f"Collection '{name}' has unsupported version {version}")
        try:
            records = json.loads(payload)
        except ValueError as e:
            raise PersistenceError(f"Collection '{name}' is unreadable: {e}") from e
        if not isinstance(records, list):
            raise PersistenceError(f"Collection '{name}' is not a list")
        logger.debug(f"Loaded {len(records)} records from '{name}'")
        return records

    def save(self, name: str, records: List[dict]) -> None:
        payload = json.dumps(records)
        db = self.session_factory()
        try:
            row = db.get(StoredCollection, name)
            if row is None:
                row = StoredCollection(name=name)
                db.add(row)
            row.version = FORMAT_VERSION
            row.payload = payload
            row.saved_at = datetime.now()
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise PersistenceError(f"Could not save collection '{name}': {e}") from e
        finally:
            db.close()
        logger.debug(f"Saved {len(records)} records to '{name}'")
