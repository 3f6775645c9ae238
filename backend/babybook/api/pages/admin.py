import logging
from typing import Dict, Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import HTMLResponse

from babybook.api.deps import get_backend, get_settings, require_admin_page
from babybook.api.templating import templates
from babybook.db.auth import Session
from babybook.db.client import BackendClient
from babybook.services.admin import AdminConsole, Notice

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin")


def get_console(
        backend: BackendClient = Depends(get_backend),
        settings=Depends(get_settings),
        session: Session = Depends(require_admin_page),
) -> AdminConsole:
    return AdminConsole(backend, session, bucket=settings.STORAGE_BUCKET)


def render_console(
        request: Request,
        console: AdminConsole,
        notices: Optional[Dict[str, Notice]] = None,
        status_code: int = 200,
) -> HTMLResponse:
    context = {
        "session": console.session,
        "notices": notices or {},
        "milestones": console.list_milestones(),
        "photos": console.list_photos(),
        "albums": console.list_albums(),
        "journal": console.list_journal(),
        "guestbook": console.list_guestbook(),
        "members": console.list_members(),
    }
    return templates.TemplateResponse(request, "admin.html", context, status_code=status_code)


def _respond(request: Request, console: AdminConsole, section: str, notice: Notice) -> HTMLResponse:
    return render_console(request, console, {section: notice}, status_code=200 if notice.ok else 400)


@router.get("", response_class=HTMLResponse)
def console_page(request: Request, console: AdminConsole = Depends(get_console)):
    return render_console(request, console)


@router.post("/milestones", response_class=HTMLResponse)
def create_milestone(
        request: Request,
        title: str = Form(""),
        happened_on: str = Form(""),
        description: str = Form(""),
        tags: str = Form(""),
        media_urls: str = Form(""),
        visibility: str = Form("private"),
        console: AdminConsole = Depends(get_console),
):
    notice = console.save_milestone({
        "title": title,
        "happened_on": happened_on,
        "description": description,
        "tags": tags,
        "media_urls": media_urls,
        "visibility": visibility,
    })
    return _respond(request, console, "milestones", notice)


@router.post("/milestones/{milestone_id}/delete", response_class=HTMLResponse)
def delete_milestone(request: Request, milestone_id: int, console: AdminConsole = Depends(get_console)):
    return _respond(request, console, "milestones", console.delete_milestone(milestone_id))


@router.post("/photos", response_class=HTMLResponse)
def create_photo(
        request: Request,
        file: Optional[UploadFile] = File(None),
        caption: str = Form(""),
        taken_at: str = Form(""),
        location: str = Form(""),
        tags: str = Form(""),
        visibility: str = Form("private"),
        album_id: str = Form(""),
        new_album: str = Form(""),
        console: AdminConsole = Depends(get_console),
):
    has_file = file is not None and bool(file.filename)
    notice = console.save_photo(
        file.filename if has_file else None,
        file.file if has_file else None,
        file.content_type if has_file else None,
        {
            "caption": caption,
            "taken_at": taken_at,
            "location": location,
            "tags": tags,
            "visibility": visibility,
            "album_id": album_id,
            "new_album": new_album,
        },
    )
    return _respond(request, console, "photos", notice)


@router.post("/photos/{photo_id}/delete", response_class=HTMLResponse)
def delete_photo(request: Request, photo_id: int, console: AdminConsole = Depends(get_console)):
    return _respond(request, console, "photos", console.delete_photo(photo_id))


@router.post("/journal", response_class=HTMLResponse)
def create_journal_entry(
        request: Request,
        title: str = Form(""),
        entry_date: str = Form(""),
        content_html: str = Form(""),
        mood: str = Form(""),
        tags: str = Form(""),
        attachments: str = Form(""),
        status: str = Form("draft"),
        publish_at: str = Form(""),
        visibility: str = Form("private"),
        console: AdminConsole = Depends(get_console),
):
    notice = console.save_journal({
        "title": title,
        "entry_date": entry_date,
        "content_html": content_html,
        "mood": mood,
        "tags": tags,
        "attachments": attachments,
        "status": status,
        "publish_at": publish_at,
        "visibility": visibility,
    })
    return _respond(request, console, "journal", notice)


@router.post("/journal/{entry_id}/delete", response_class=HTMLResponse)
def delete_journal_entry(request: Request, entry_id: int, console: AdminConsole = Depends(get_console)):
    return _respond(request, console, "journal", console.delete_journal(entry_id))


@router.post("/guestbook/{entry_id}/status", response_class=HTMLResponse)
def moderate_guestbook_entry(
        request: Request,
        entry_id: int,
        status: str = Form(...),
        console: AdminConsole = Depends(get_console),
):
    return _respond(request, console, "guestbook", console.set_guest_status(entry_id, status))


@router.post("/members", response_class=HTMLResponse)
def add_member(
        request: Request,
        email: str = Form(""),
        password: str = Form(""),
        console: AdminConsole = Depends(get_console),
):
    return _respond(request, console, "members", console.add_member(email, password))


@router.post("/members/{user_id}/delete", response_class=HTMLResponse)
def remove_member(request: Request, user_id: str, console: AdminConsole = Depends(get_console)):
    return _respond(request, console, "members", console.remove_member(user_id))
