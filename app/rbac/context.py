"""
Where the web layer gets user records from.

The RBAC functions never load users themselves. A UserStore is handed to
create_app() and the current user is looked up once per request.
"""
import logging
import threading
from typing import Iterable, Optional, Protocol

from flask import current_app, g, session

from app.rbac.models import UserRecord
from app.rbac.roles import Role

logger = logging.getLogger(__name__)

STORE_EXTENSION = 'user_store'


class UserStore(Protocol):
    """Persistence collaborator supplying user records"""

    def get(self, user_id) -> Optional[UserRecord]:
        ...

    def list(self, role: Optional[Role] = None) -> list[UserRecord]:
        ...

    def save(self, record: UserRecord) -> UserRecord:
        ...

    def delete(self, user_id) -> bool:
        ...


class InMemoryUserStore:
    """Dict backed store, used for development and tests"""

    def __init__(self, documents: Optional[dict] = None):
        self._lock = threading.Lock()
        self._records: dict = {}
        for user_id, doc in (documents or {}).items():
            self._records[str(user_id)] = UserRecord.from_document(doc, user_id=str(user_id))

    def get(self, user_id) -> Optional[UserRecord]:
        if user_id is None:
            return None
        with self._lock:
            return self._records.get(str(user_id))

    def list(self, role: Optional[Role] = None) -> list[UserRecord]:
        with self._lock:
            records = list(self._records.values())
        if role is not None:
            records = [record for record in records if record.role == role]
        return records

    def save(self, record: UserRecord) -> UserRecord:
        if record.id is None:
            raise ValueError("Cannot save a user record without an id")
        with self._lock:
            self._records[str(record.id)] = record
        return record

    def save_all(self, records: Iterable[UserRecord]) -> None:
        for record in records:
            self.save(record)

    def delete(self, user_id) -> bool:
        with self._lock:
            return self._records.pop(str(user_id), None) is not None


def get_user_store() -> UserStore:
    """Store registered on the current application"""
    return current_app.extensions[STORE_EXTENSION]


def get_current_user() -> Optional[UserRecord]:
    """
    Get the signed in user's record for this request.

    Returns None when nobody is signed in, the session points at a user
    that no longer exists, or the user is suspended.
    """
    if 'rbac_user' in g:
        return g.rbac_user

    record = None
    user_id = session.get('user_id')
    if user_id is not None:
        record = get_user_store().get(user_id)
        if record is None:
            logger.info(f"Session user {user_id} not found in user store")
        elif record.suspended:
            logger.info(f"Suspended user {user_id} attempted to use the application")
            record = None

    g.rbac_user = record
    return record
