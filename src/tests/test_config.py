"""Unit tests for application configuration."""

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from dbwiki.config import Settings


class TestSettings:
    def test_defaults(self):
        with patch.dict("os.environ", {}, clear=True):
            s = Settings(_env_file=None)
            assert s.database_url == "sqlite:///data/wiki.db"
            assert s.create_schema is True
            assert s.front_page == "FrontPage"
            assert s.debug is False
            assert s.app_title == "DBWiki"
            assert s.port == 8080
            assert s.log_level == "INFO"

    def test_pool_defaults(self):
        with patch.dict("os.environ", {}, clear=True):
            s = Settings(_env_file=None)
            assert s.pool_size == 5
            assert s.pool_max_overflow == 5
            assert s.pool_recycle == 30

    def test_from_env(self):
        env = {
            "DBWIKI_DATABASE_URL": "postgresql://localhost:5432/wiki",
            "DBWIKI_DEBUG": "true",
            "DBWIKI_APP_TITLE": "MyWiki",
            "DBWIKI_POOL_RECYCLE": "45",
            "DBWIKI_FRONT_PAGE": "Home",
        }
        with patch.dict("os.environ", env, clear=True):
            s = Settings(_env_file=None)
            assert s.database_url == "postgresql://localhost:5432/wiki"
            assert s.debug is True
            assert s.app_title == "MyWiki"
            assert s.pool_recycle == 45
            assert s.front_page == "Home"

    def test_invalid_front_page(self):
        with patch.dict("os.environ", {"DBWIKI_FRONT_PAGE": "Front Page"}, clear=True):
            with pytest.raises(ValidationError):
                Settings(_env_file=None)

    def test_invalid_log_level(self):
        with patch.dict("os.environ", {"DBWIKI_LOG_LEVEL": "LOUD"}, clear=True):
            with pytest.raises(ValidationError):
                Settings(_env_file=None)
