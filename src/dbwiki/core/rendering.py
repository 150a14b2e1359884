"""Template rendering for wiki pages."""

from pathlib import Path

import jinja2
from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from dbwiki.core.exceptions import RenderError
from dbwiki.core.models import Page

TEMPLATE_NAMES = ("view", "edit")


class TemplateRenderer:
    """Fills the named page templates.

    Templates are read once when the renderer is built; a missing template
    fails there rather than on the first request.
    """

    def __init__(self, directory: Path, app_title: str = "DBWiki"):
        env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(directory)),
            autoescape=jinja2.select_autoescape(),
            auto_reload=False,
        )
        self.templates = Jinja2Templates(env=env)
        self.app_title = app_title
        for name in TEMPLATE_NAMES:
            env.get_template(f"{name}.html")

    def render(self, request: Request, name: str, page: Page) -> HTMLResponse:
        """Render ``page`` with the template called ``name``."""
        if name not in TEMPLATE_NAMES:
            raise RenderError(f"template {name!r} is not defined")
        try:
            return self.templates.TemplateResponse(
                request,
                f"{name}.html",
                {"page": page, "app_title": self.app_title},
            )
        except jinja2.TemplateError as exc:
            raise RenderError(str(exc)) from exc
