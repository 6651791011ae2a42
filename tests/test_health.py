"""
Health endpoint tests
"""

import pytest

from userapi.config.settings import SERVICE_NAME


class TestHealth:

    @pytest.mark.asyncio
    async def test_health_reports_ok(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "service": SERVICE_NAME}

    @pytest.mark.asyncio
    async def test_responses_carry_trace_id(self, client):
        response = await client.get("/health")

        assert len(response.headers["X-Trace-ID"]) == 8
