"""
Unit Tests for Health Check Endpoints.

Tests the liveness check, the readiness check and the database check.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import HTTPException


class TestHealthCheck:
    """Tests for the liveness health check endpoint."""

    @pytest.mark.asyncio
    async def test_health_returns_healthy(self):
        from notevault.api.health import health_check

        assert await health_check() == {"status": "healthy"}


class TestCheckDatabase:
    """Tests for the database check."""

    @pytest.mark.asyncio
    async def test_healthy_when_query_succeeds(self):
        from notevault.api.health import check_database

        session = AsyncMock()
        session_cm = MagicMock()
        session_cm.__aenter__ = AsyncMock(return_value=session)
        session_cm.__aexit__ = AsyncMock(return_value=False)
        factory = MagicMock(return_value=session_cm)

        with patch("notevault.core.database.get_session_factory", return_value=factory):
            result = await check_database()

        assert result["status"] == "healthy"
        assert "latency_ms" in result
        session.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unhealthy_when_engine_fails(self):
        from notevault.api.health import check_database

        with patch(
            "notevault.core.database.get_session_factory",
            side_effect=RuntimeError("no database configured"),
        ):
            result = await check_database()

        assert result == {"status": "unhealthy", "error": "no database configured"}


class TestReadinessCheck:
    """Tests for /health/ready."""

    @pytest.mark.asyncio
    async def test_ready_when_database_healthy(self):
        from notevault.api.health import readiness_check

        with patch(
            "notevault.api.health.check_database",
            return_value={"status": "healthy", "latency_ms": 1},
        ):
            result = await readiness_check()

        assert result["status"] == "healthy"
        assert result["checks"]["database"]["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_503_when_database_unhealthy(self):
        from notevault.api.health import readiness_check

        with patch(
            "notevault.api.health.check_database",
            return_value={"status": "unhealthy", "error": "down"},
        ):
            with pytest.raises(HTTPException) as exc_info:
                await readiness_check()

        assert exc_info.value.status_code == 503
        assert exc_info.value.detail["checks"]["database"]["error"] == "down"
