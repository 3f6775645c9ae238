import logging
import os

from babybook.db.client import BackendClient
from babybook.db.errors import AuthError

logger = logging.getLogger(__name__)


def init_db(backend: BackendClient, settings) -> None:
    # Create tables
    backend.create_all()

    # Check if uploads folder exists
    if not os.path.exists(settings.UPLOAD_FOLDER):
        os.makedirs(settings.UPLOAD_FOLDER)

    # Create initial admin user if configured and not there yet
    if not (settings.FIRST_ADMIN_EMAIL and settings.FIRST_ADMIN_PASSWORD):
        return

    email = settings.FIRST_ADMIN_EMAIL.strip().lower()
    try:
        user = backend.auth.sign_up(email, settings.FIRST_ADMIN_PASSWORD)
        user_id = user.id
    except AuthError:
        user_id = backend.table("users").select("id").eq("email", email).single().execute().data["id"]

    admin = backend.table("admins").select("user_id").eq("user_id", user_id).maybe_single().execute()
    if not admin.data:
        backend.table("admins").insert({"user_id": user_id, "email": email}).execute()
        logger.info("Created initial admin %s", email)
