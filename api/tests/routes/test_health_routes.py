"""Unit tests for health check routes."""

from unittest.mock import MagicMock, patch

import pytest
from fastapi import HTTPException
from httpx import AsyncClient

from core.database import PoolStatus
from routes.health_routes import health, health_detailed, ready


@pytest.mark.unit
class TestHealthEndpoint:
    """Tests for GET /health."""

    async def test_health_returns_200_healthy(self):
        """Health endpoint returns status=healthy."""
        result = await health()
        assert result.status == "healthy"
        assert result.service == "local-service-directory"


@pytest.mark.unit
class TestReadyEndpoint:
    """Tests for GET /ready."""

    async def test_ready_returns_200_when_healthy(self):
        """Ready returns 200 when init_done=True and DB is reachable."""
        request = MagicMock()
        request.app.state.init_error = None
        request.app.state.init_done = True

        with patch(
            "routes.health_routes.check_db_connection",
            autospec=True,
        ) as mock_check:
            result = await ready(request)

        assert result.status == "ready"
        mock_check.assert_awaited_once_with(request.app.state.engine)

    async def test_ready_returns_503_when_init_error(self):
        """Ready returns 503 when init_error is set."""
        request = MagicMock()
        request.app.state.init_error = "migrations failed"
        request.app.state.init_done = False

        with pytest.raises(HTTPException) as exc_info:
            await ready(request)

        assert exc_info.value.status_code == 503
        assert "Initialization failed" in exc_info.value.detail

    async def test_ready_returns_503_when_init_not_done(self):
        request = MagicMock()
        request.app.state.init_error = None
        request.app.state.init_done = False

        with pytest.raises(HTTPException) as exc_info:
            await ready(request)

        assert exc_info.value.status_code == 503
        assert exc_info.value.detail == "Starting"

    async def test_ready_returns_503_when_db_unreachable(self):
        request = MagicMock()
        request.app.state.init_error = None
        request.app.state.init_done = True

        with patch(
            "routes.health_routes.check_db_connection",
            autospec=True,
            side_effect=OSError("connection refused"),
        ):
            with pytest.raises(HTTPException) as exc_info:
                await ready(request)

        assert exc_info.value.status_code == 503
        assert exc_info.value.detail == "Database unavailable"


@pytest.mark.unit
class TestHealthDetailedEndpoint:
    async def test_reports_pool_status(self):
        request = MagicMock()
        pool = PoolStatus(pool_size=5, checked_out=1, overflow=0, checked_in=4)

        with patch(
            "routes.health_routes.comprehensive_health_check",
            autospec=True,
            return_value={"database": True, "pool": pool},
        ):
            result = await health_detailed(request)

        assert result.status == "healthy"
        assert result.database is True
        assert result.pool.checked_out == 1

    async def test_unhealthy_when_database_down(self):
        request = MagicMock()

        with patch(
            "routes.health_routes.comprehensive_health_check",
            autospec=True,
            return_value={"database": False, "pool": None},
        ):
            result = await health_detailed(request)

        assert result.status == "unhealthy"
        assert result.pool is None


@pytest.mark.integration
class TestHealthOverHttp:
    async def test_ready_against_sqlite(self, client: AsyncClient):
        response = await client.get("/ready")

        assert response.status_code == 200
        assert response.json() == {
            "status": "ready",
            "service": "local-service-directory",
        }

    async def test_response_carries_timing_and_security_headers(
        self, client: AsyncClient
    ):
        response = await client.get("/health")

        assert response.headers["x-request-id"]
        assert float(response.headers["x-request-duration-ms"]) >= 0
        assert response.headers["x-content-type-options"] == "nosniff"
