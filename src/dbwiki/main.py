"""DBWiki FastAPI application."""

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import APIRouter, Depends, FastAPI, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from dbwiki.config import Settings
from dbwiki.config import settings as default_settings
from dbwiki.core.exceptions import WikiError, not_found_handler, wiki_error_handler
from dbwiki.core.models import Page
from dbwiki.core.rendering import TemplateRenderer
from dbwiki.core.routing import TITLE_DEPENDENCIES, Action
from dbwiki.core.storage import SQLStorage, Storage

templates_path = Path(__file__).parent / "templates"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: open and release the page store."""
    app.state.storage.connect()
    yield
    app.state.storage.close()


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_renderer(request: Request) -> TemplateRenderer:
    return request.app.state.renderer


router = APIRouter()


def root(request: Request):
    """Send visitors to the front page."""
    front_page = request.app.state.settings.front_page
    return RedirectResponse(url=f"/view/{front_page}", status_code=302)


# A plain route with no method list answers every method.
router.add_route("/", root)


@router.get("/view/{title}", response_class=HTMLResponse)
def view_page(
    request: Request,
    title: str = Depends(TITLE_DEPENDENCIES[Action.VIEW]),
    storage: Storage = Depends(get_storage),
    renderer: TemplateRenderer = Depends(get_renderer),
):
    """View a wiki page."""
    page = storage.get_page(title)

    if page is None:
        # Page doesn't exist - redirect to edit to create it
        return RedirectResponse(url=f"/edit/{title}", status_code=302)

    return renderer.render(request, "view", page)


@router.get("/edit/{title}", response_class=HTMLResponse)
def edit_page(
    request: Request,
    title: str = Depends(TITLE_DEPENDENCIES[Action.EDIT]),
    storage: Storage = Depends(get_storage),
    renderer: TemplateRenderer = Depends(get_renderer),
):
    """Edit page form."""
    page = storage.get_page(title)

    if page is None:
        # New page
        page = Page(title=title)

    return renderer.render(request, "edit", page)


@router.post("/save/{title}")
def save_page(
    title: str = Depends(TITLE_DEPENDENCIES[Action.SAVE]),
    body: str = Form(""),
    storage: Storage = Depends(get_storage),
):
    """Save page content."""
    page = Page(title=title, body=body.encode("utf-8"))
    storage.save_page(page)
    return RedirectResponse(url=f"/view/{title}", status_code=302)


def create_app(
    settings: Settings | None = None,
    storage: Storage | None = None,
    renderer: TemplateRenderer | None = None,
) -> FastAPI:
    """Build the application with its collaborators.

    Anything not passed in is built from ``settings``, which defaults to the
    environment.
    """
    if settings is None:
        settings = default_settings
    if storage is None:
        storage = SQLStorage.from_settings(settings)
    if renderer is None:
        renderer = TemplateRenderer(templates_path, app_title=settings.app_title)

    app = FastAPI(
        title=settings.app_title,
        debug=settings.debug,
        lifespan=lifespan,
        redirect_slashes=False,
    )
    app.state.settings = settings
    app.state.storage = storage
    app.state.renderer = renderer

    app.exception_handler(WikiError)(wiki_error_handler)
    app.exception_handler(StarletteHTTPException)(not_found_handler)
    app.include_router(router)
    return app


app = create_app()
