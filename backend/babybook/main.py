import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles

from babybook.api.deps import AdminCheckFailed, LoginRequired, login_url
from babybook.api.router import api_router, page_router
from babybook.api.templating import templates
from babybook.config import Settings, settings as default_settings
from babybook.db.client import BackendClient
from babybook.db.init_db import init_db

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, backend: Optional[BackendClient] = None) -> FastAPI:
    settings = settings or default_settings
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_V1_STR}/openapi.json"
    )
    app.state.settings = settings
    app.state.backend = backend or BackendClient.from_settings(settings)

    # Set up CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # In production, restrict this to your frontend domain
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix=settings.API_V1_STR)
    app.include_router(page_router)

    # Serve uploaded files when public URLs point back at this app; init_db creates the folder
    if settings.STORAGE_PUBLIC_URL.startswith("/"):
        app.mount(
            settings.STORAGE_PUBLIC_URL,
            StaticFiles(directory=settings.UPLOAD_FOLDER, check_dir=False),
            name="uploads",
        )

    @app.exception_handler(LoginRequired)
    def redirect_to_login(request: Request, exc: LoginRequired):
        return RedirectResponse(login_url(exc.next_path), status_code=303)

    @app.exception_handler(AdminCheckFailed)
    def admin_check_failed(request: Request, exc: AdminCheckFailed):
        return templates.TemplateResponse(request, "admin_denied.html", {"message": exc.message}, status_code=403)

    @app.on_event("startup")
    def on_startup():
        init_db(app.state.backend, settings)
        logger.info("%s ready (storage bucket %s)", settings.PROJECT_NAME, settings.STORAGE_BUCKET)

    @app.on_event("shutdown")
    def on_shutdown():
        app.state.backend.dispose()

    return app


app = create_app()
