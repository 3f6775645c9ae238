"""
Admin console operations: create/list/delete content, photo uploads,
guestbook moderation and member management.

Callers are expected to have checked the admin role already; every insert
records the acting user's id.
"""
import logging
import mimetypes
import time
from dataclasses import dataclass
from typing import Any, BinaryIO, Callable, Dict, Optional, Tuple, Union

from babybook.core.text import safe_file_name, split_csv
from babybook.db.auth import Session
from babybook.db.client import BackendClient
from babybook.db.errors import BackendError
from babybook.services.sections import Section

logger = logging.getLogger(__name__)

MILESTONE_LIST_LIMIT = 10
PHOTO_LIST_LIMIT = 8
JOURNAL_LIST_LIMIT = 10
GUESTBOOK_LIST_LIMIT = 30
MEMBER_LIST_LIMIT = 50
MODERATION_STATUSES = ("approved", "rejected")

Form = Dict[str, Any]


@dataclass
class Notice:
    ok: bool
    text: str

    @classmethod
    def success(cls, text: str) -> "Notice":
        return cls(True, "✅ " + text)

    @classmethod
    def failure(cls, text: str) -> "Notice":
        return cls(False, "❌ " + text)


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    value = (value or "").strip()
    return value or None


def _load(query, label: str) -> Section:
    try:
        return Section(data=query.execute().data)
    except BackendError as exc:
        logger.error("%s load error: %s", label, exc.message)
        return Section(data=[], error=exc.message)


class AdminConsole:
    def __init__(
            self,
            backend: BackendClient,
            session: Optional[Session],
            bucket: str = "aariv-media",
            clock: Callable[[], float] = time.time,
    ):
        self.backend = backend
        self.session = session
        self.bucket = bucket
        self.clock = clock

    def _with_owner(self, payload: Form) -> Form:
        if self.session is not None:
            payload["user_id"] = self.session.user.id
        return payload

    def _insert(self, table: str, payload: Form, label: str) -> Optional[Notice]:
        try:
            self.backend.table(table).insert(self._with_owner(payload)).execute()
        except BackendError as exc:
            logger.error("%s insert error: %s", label, exc.describe())
            return Notice.failure(exc.describe())
        logger.info("%s saved by %s", label, payload.get("user_id"))
        return None

    def _delete(self, table: str, column: str, value: Any, label: str) -> Notice:
        try:
            self.backend.table(table).delete().eq(column, value).execute()
        except BackendError as exc:
            logger.error("%s delete error: %s", label, exc.describe())
            return Notice.failure(exc.describe())
        logger.info("%s %s deleted", label, value)
        return Notice.success(f"{label} deleted.")

    # -- milestones ----------------------------------------------------------

    def save_milestone(self, form: Form) -> Notice:
        payload = {
            "title": (form.get("title") or "").strip(),
            "happened_on": form.get("happened_on"),
            "description": _blank_to_none(form.get("description")),
            "tags": split_csv(form.get("tags")),
            "media_urls": split_csv(form.get("media_urls")),
            "visibility": form.get("visibility") or "private",
        }
        return self._insert("milestones", payload, "Milestone") or Notice.success("Milestone saved.")

    def list_milestones(self) -> Section:
        return _load(
            self.backend.table("milestones")
            .select("id,title,happened_on,visibility,tags,media_urls")
            .order("happened_on", desc=True)
            .limit(MILESTONE_LIST_LIMIT),
            "Milestones",
        )

    def delete_milestone(self, milestone_id: int) -> Notice:
        return self._delete("milestones", "id", milestone_id, "Milestone")

    # -- albums & photos -----------------------------------------------------

    def list_albums(self) -> Section:
        return _load(
            self.backend.table("albums").select("id,name,visibility,event_date").order("created_at", desc=True),
            "Albums",
        )

    def upload_photo_to_storage(
            self, filename: str, data: Union[bytes, BinaryIO], content_type: Optional[str] = None
    ) -> Tuple[str, str]:
        """Store the file under a timestamped name and return ``(path, public_url)``."""
        ext = filename.rsplit(".", 1)[-1] if "." in filename else "jpg"
        path = f"gallery/{int(self.clock() * 1000)}_{safe_file_name(filename)}"
        content_type = content_type or mimetypes.guess_type(filename)[0] or f"image/{ext}"

        bucket = self.backend.storage.from_(self.bucket)
        bucket.upload(path, data, content_type=content_type, upsert=False)
        return path, bucket.get_public_url(path)

    def ensure_album_id(self, selected: Optional[str], new_album: Optional[str], visibility: str) -> Optional[int]:
        """Album for a new photo; a typed name creates the album first."""
        new_album = (new_album or "").strip()
        if new_album:
            created = (
                self.backend.table("albums")
                .insert({"name": new_album, "visibility": visibility or "private"})
                .select("id")
                .execute()
            )
            album_id = created.data[0]["id"]
            logger.info("Created album %r (%s)", new_album, album_id)
            return album_id
        return int(selected) if selected else None

    def save_photo(
            self,
            filename: Optional[str],
            data: Union[bytes, BinaryIO, None],
            content_type: Optional[str],
            form: Form,
    ) -> Notice:
        if not filename or data is None:
            return Notice.failure("Please choose a file.")

        # Upload first: without a stored file there is nothing to point a row at
        try:
            _, public_url = self.upload_photo_to_storage(filename, data, content_type)
        except BackendError as exc:
            logger.error("Photo upload error: %s", exc.describe())
            return Notice.failure(exc.message or "Upload failed")

        visibility = form.get("visibility") or "private"
        try:
            album_id = self.ensure_album_id(form.get("album_id"), form.get("new_album"), visibility)
        except (BackendError, ValueError) as exc:
            message = exc.describe() if isinstance(exc, BackendError) else str(exc)
            logger.error("Album error for uploaded %s: %s", public_url, message)
            return Notice.failure(message)

        payload = {
            "url": public_url,
            "caption": _blank_to_none(form.get("caption")),
            "taken_at": _blank_to_none(form.get("taken_at")),
            "location": _blank_to_none(form.get("location")),
            "tags": split_csv(form.get("tags")),
            "is_favorite": False,
            "visibility": visibility,
            "album_id": album_id,
        }
        return self._insert("photos", payload, "Photo") or Notice.success("Uploaded and saved.")

    def list_photos(self) -> Section:
        return _load(
            self.backend.table("photos")
            .select("id,caption,url,visibility,taken_at,is_favorite")
            .order("created_at", desc=True)
            .limit(PHOTO_LIST_LIMIT),
            "Photos",
        )

    def delete_photo(self, photo_id: int) -> Notice:
        """Delete the photo row. The stored file is left in the bucket."""
        return self._delete("photos", "id", photo_id, "Photo")

    # -- journal -------------------------------------------------------------

    def save_journal(self, form: Form) -> Notice:
        status = form.get("status") or "draft"
        publish_at = _blank_to_none(form.get("publish_at"))
        payload = {
            "title": (form.get("title") or "").strip(),
            "entry_date": form.get("entry_date"),
            "content_html": (form.get("content_html") or "").strip(),
            "mood": _blank_to_none(form.get("mood")),
            "tags": split_csv(form.get("tags")),
            "attachments": split_csv(form.get("attachments")),
            "status": status,
            "publish_at": publish_at if status == "scheduled" else None,
            "visibility": form.get("visibility") or "private",
        }
        return self._insert("journal_entries", payload, "Journal entry") or Notice.success("Journal entry saved.")

    def list_journal(self) -> Section:
        return _load(
            self.backend.table("journal_entries")
            .select("id,title,entry_date,visibility,status,publish_at")
            .order("entry_date", desc=True)
            .limit(JOURNAL_LIST_LIMIT),
            "Journal",
        )

    def delete_journal(self, entry_id: int) -> Notice:
        return self._delete("journal_entries", "id", entry_id, "Journal entry")

    # -- guestbook moderation ------------------------------------------------

    def list_guestbook(self) -> Section:
        return _load(
            self.backend.table("guestbook_entries")
            .select("id,name,relation,message,photo_url,status,created_at")
            .order("created_at", desc=True)
            .limit(GUESTBOOK_LIST_LIMIT),
            "Guestbook",
        )

    def set_guest_status(self, entry_id: int, status: str) -> Notice:
        """Approve or reject an entry, overwriting whatever status it had."""
        if status not in MODERATION_STATUSES:
            return Notice.failure(f"Unknown status: {status}")
        try:
            self.backend.table("guestbook_entries").update({"status": status}).eq("id", entry_id).execute()
        except BackendError as exc:
            logger.error("Guestbook moderation error: %s", exc.describe())
            return Notice.failure(exc.describe())
        logger.info("Guestbook entry %s %s", entry_id, status)
        return Notice.success(f"Entry {status}.")

    # -- members -------------------------------------------------------------

    def list_members(self) -> Section:
        return _load(
            self.backend.table("members")
            .select("user_id,email,created_at")
            .order("created_at", desc=True)
            .limit(MEMBER_LIST_LIMIT),
            "Members",
        )

    def _user_id_for(self, email: str, password: str) -> str:
        """Existing account for ``email``, or a new one with ``password``."""
        found = self.backend.table("users").select("id").eq("email", email).maybe_single().execute().data
        if found:
            return found["id"]
        return self.backend.auth.sign_up(email, password).id

    def add_member(self, email: str, password: str) -> Notice:
        """Grant member access, creating the account first when there is none."""
        email = (email or "").strip().lower()
        if not email or not password:
            return Notice.failure("Email and password are required.")
        try:
            user_id = self._user_id_for(email, password)
            self.backend.table("members").insert({"user_id": user_id, "email": email}).execute()
        except BackendError as exc:
            logger.error("Member add error: %s", exc.describe())
            return Notice.failure(exc.describe())
        logger.info("Member %s added", email)
        return Notice.success("Member added.")

    def remove_member(self, user_id: str) -> Notice:
        return self._delete("members", "user_id", user_id, "Member")
