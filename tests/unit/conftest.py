"""
Unit Test Fixtures.

Fixtures for unit tests - all external dependencies are mocked.
Unit tests should be fast and isolated, never touching real databases.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest


# =============================================================================
# Database Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """
    Mock database session for unit tests.

    Usage:
        def test_service(mock_db_session: AsyncMock):
            service = NoteService(mock_db_session)
    """
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.execute = AsyncMock()
    session.add = MagicMock()
    session.delete = AsyncMock()
    return session


@pytest.fixture
def mock_publisher() -> MagicMock:
    """Change publisher with every event method mocked."""
    from notevault.events.publishers import ChangePublisher

    return MagicMock(spec=ChangePublisher)


# =============================================================================
# Config Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_app_config() -> MagicMock:
    """
    Mock YAML application configuration.

    Usage:
        def test_with_config(mock_app_config):
            with patch("notevault.core.config.get_app_config", return_value=mock_app_config):
                ...
    """
    config = MagicMock()
    config.features.events_publish_enabled = False
    config.events.source = "note-service"
    config.events.streams.note_changed = "notes:note-changed"
    config.events.streams.category_changed = "notes:category-changed"
    config.events.streams.default_maxlen = 10000
    config.security.jwt.algorithm = "HS256"
    config.security.jwt.access_token_expire_minutes = 30
    config.security.jwt.audience = "notevault"
    return config


# =============================================================================
# Logging Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_logger() -> MagicMock:
    """
    Mock logger for testing logging calls.

    Usage:
        def test_logging(mock_logger):
            with patch("module.logger", mock_logger):
                ...
                mock_logger.info.assert_called_once()
    """
    logger = MagicMock()
    logger.debug = MagicMock()
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    logger.exception = MagicMock()
    return logger
