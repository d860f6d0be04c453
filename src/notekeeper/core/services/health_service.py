"""Health service implementation."""

import time

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.common import HealthCheckResponse
from .interfaces import IHealthService


class HealthService(IHealthService):
    """Health check service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def check_database_health(self) -> HealthCheckResponse:
        """Round-trip a trivial query; failures are reported, not raised."""
        try:
            start_time = time.perf_counter()
            result = await self.session.execute(text("SELECT 1"))
            result.scalar()
            response_time = (time.perf_counter() - start_time) * 1000

            return HealthCheckResponse(
                connected=True,
                status="healthy",
                response_time_ms=round(response_time, 2),
            )
        except SQLAlchemyError as e:
            return HealthCheckResponse(
                connected=False,
                status="unhealthy",
                error=str(e),
                response_time_ms=0.0,
            )
