"""Data models for DBWiki."""

import re

from pydantic import BaseModel, Field

TITLE_PATTERN = re.compile(r"[a-zA-Z0-9]+")


class Page(BaseModel):
    """Represents a wiki page.

    The title is the natural key of the page; the body is kept as raw bytes,
    the way it is stored in the database.
    """

    title: str = Field(pattern=r"^[a-zA-Z0-9]+$")
    body: bytes = b""

    @property
    def text(self) -> str:
        """Return the body decoded for display."""
        return self.body.decode("utf-8", errors="replace")
