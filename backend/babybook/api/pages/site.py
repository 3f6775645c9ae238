import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from babybook.api.deps import get_backend, get_session
from babybook.api.templating import templates
from babybook.db.auth import Session
from babybook.db.client import BackendClient
from babybook.services.gallery import GalleryPager, policy_for
from babybook.services.guestbook import submit_guestbook_entry
from babybook.services.journal import load_journal
from babybook.services.public import load_approved_guestbook, load_public_milestones, load_site_settings
from babybook.services.roles import resolve_role

logger = logging.getLogger(__name__)

router = APIRouter()

LIGHTBOX_KEYS = ("ArrowLeft", "ArrowRight", "Escape")


def render_home(
        request: Request,
        backend: BackendClient,
        session: Optional[Session],
        gallery_page: int = 0,
        guestbook_notice: Optional[Dict[str, Any]] = None,
        guestbook_form: Optional[Dict[str, str]] = None,
        status_code: int = 200,
) -> HTMLResponse:
    role = resolve_role(backend, session)
    policy = policy_for(role)

    pager = GalleryPager(backend, include_private=policy.include_private)
    gallery = pager.load_through(max(gallery_page, 0))

    context = {
        "session": session,
        "role": role,
        "policy": policy,
        "site": load_site_settings(backend),
        "milestones": load_public_milestones(backend),
        "guestbook": load_approved_guestbook(backend),
        "gallery": gallery,
        "pager": pager,
        "journal": load_journal(backend, policy),
        "guestbook_notice": guestbook_notice,
        "guestbook_form": guestbook_form or {"name": "", "relation": "", "message": ""},
    }
    return templates.TemplateResponse(request, "index.html", context, status_code=status_code)


@router.get("/", response_class=HTMLResponse)
def home(
        request: Request,
        gallery_page: int = 0,
        backend: BackendClient = Depends(get_backend),
        session: Optional[Session] = Depends(get_session),
):
    return render_home(request, backend, session, gallery_page=gallery_page)


@router.post("/guestbook", response_class=HTMLResponse)
def post_guestbook(
        request: Request,
        name: str = Form(""),
        relation: str = Form(""),
        message: str = Form(""),
        backend: BackendClient = Depends(get_backend),
        session: Optional[Session] = Depends(get_session),
):
    result = submit_guestbook_entry(backend, name, relation, message)
    form = None if result.ok else {"name": name, "relation": relation, "message": message}
    return render_home(
        request,
        backend,
        session,
        guestbook_notice={"ok": result.ok, "text": result.message},
        guestbook_form=form,
        status_code=200 if result.ok else 400,
    )


@router.get("/lightbox/{index}", response_class=HTMLResponse)
def lightbox(
        request: Request,
        index: int,
        gallery_page: int = 0,
        key: Optional[str] = None,
        backend: BackendClient = Depends(get_backend),
        session: Optional[Session] = Depends(get_session),
):
    policy = policy_for(resolve_role(backend, session))
    pager = GalleryPager(backend, include_private=policy.include_private)
    pager.load_through(max(gallery_page, 0))

    box = pager.lightbox
    box.open_at(index)
    if key in LIGHTBOX_KEYS:
        box.handle_key(key)

    gallery_url = f"/?gallery_page={max(gallery_page, 0)}#gallery"
    if not box.is_open:
        return RedirectResponse(gallery_url, status_code=303)

    return templates.TemplateResponse(
        request,
        "lightbox.html",
        {"box": box, "item": box.current, "gallery_page": max(gallery_page, 0), "gallery_url": gallery_url},
    )
