"""Unit tests for the Page model."""

import pytest
from pydantic import ValidationError

from dbwiki.core.models import Page


class TestPage:
    def test_defaults_to_empty_body(self):
        page = Page(title="NewPage")
        assert page.title == "NewPage"
        assert page.body == b""
        assert page.text == ""

    def test_text_decodes_body(self):
        page = Page(title="Caf3", body="café".encode("utf-8"))
        assert page.text == "café"

    def test_text_replaces_invalid_bytes(self):
        page = Page(title="Broken", body=b"ok\xff")
        assert page.text == "ok�"

    @pytest.mark.parametrize("title", ["", "Front Page", "a-b", "page/1", "ümlaut"])
    def test_rejects_invalid_titles(self, title):
        with pytest.raises(ValidationError):
            Page(title=title)

    @pytest.mark.parametrize("title", ["a", "FrontPage", "Page42", "0"])
    def test_accepts_alphanumeric_titles(self, title):
        assert Page(title=title).title == title
