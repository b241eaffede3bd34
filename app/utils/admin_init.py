"""
Admin initialization utility
Seeds the user store on startup and makes sure an admin account exists
"""
import json
import logging
import os

from app.rbac.models import UserRecord
from app.rbac.roles import Role

logger = logging.getLogger(__name__)


def load_seed_users(store, path):
    """
    Load user documents from a JSON file of the form {"<user_id>": {...}}.

    Documents go through UserRecord.from_document, so bad role or
    permission values are stored in their fail-closed form.
    """
    if not path:
        return 0
    if not os.path.exists(path):
        logger.warning(f"Seed users file not found: {path}")
        return 0

    with open(path, encoding='utf-8') as fh:
        documents = json.load(fh)

    count = 0
    for user_id, doc in documents.items():
        store.save(UserRecord.from_document(doc, user_id=str(user_id)))
        count += 1
    logger.info(f"Loaded {count} users from {path}")
    return count


def create_default_admin(store, user_id='admin', email='admin@example.com'):
    """
    Create default admin account if no admin exists.

    Returns:
        The existing or newly created admin record
    """
    admins = store.list(Role.ADMIN)
    if admins:
        logger.info(f"Admin account already exists: {admins[0].id}")
        return admins[0]

    if store.get(user_id) is not None:
        # never promote an existing account to admin implicitly
        user_id = f"{user_id}-{len(store.list()) + 1}"

    admin = store.save(UserRecord(id=user_id, email=email, role=Role.ADMIN))
    logger.info(f"Default admin account created: {user_id} ({email})")
    return admin
