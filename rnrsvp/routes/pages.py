"""HTML pages: the participant page and the admin page."""
from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from rnrsvp.core.config import TEMPLATES_DIR, settings

router = APIRouter(tags=["pages"])
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def _context() -> dict:
    return {
        "app_name": settings.app_name,
        "event_title": settings.event_title,
        "admin_path": settings.admin_path,
    }


@router.get("/", response_class=HTMLResponse)
async def index(request: Request):
    """Participant page: RSVP, agenda and contact form."""
    return templates.TemplateResponse(request, "index.html", _context())


async def admin(request: Request):
    """
    Admin page: settings, participant list, messages and quarterly report.

    Mounted at settings.admin_path. No authentication.
    """
    return templates.TemplateResponse(request, "admin.html", _context())


router.add_api_route(
    settings.admin_path, admin, methods=["GET"], response_class=HTMLResponse
)
