"""Visit-tracking middleware for Starlette."""

import logging
from collections.abc import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from visit_counter.adapters.web.client_info import extract_client_ip
from visit_counter.domain.contracts.visit_recorder import VisitRecorderProtocol
from visit_counter.domain.models import StorageError

logger = logging.getLogger(__name__)


class VisitTrackingMiddleware(BaseHTTPMiddleware):
    """Counts one visit per request for the calling IP address, then continues."""

    def __init__(
        self,
        app: ASGIApp,
        service: VisitRecorderProtocol,
        fail_on_storage_error: bool = False,
    ) -> None:
        """Initialize visit-tracking middleware.

        Args:
            app: The ASGI application to wrap.
            service: Recorder that counts the visit (usually a VisitTrackingService).
            fail_on_storage_error: Answer 503 instead of serving the request when
                the visit cannot be stored.
        """
        super().__init__(app)
        self.service = service
        self.fail_on_storage_error = fail_on_storage_error

    def _create_unavailable_response(self) -> Response:
        return Response(
            content="Service temporarily unavailable.",
            status_code=503,
            headers={"Retry-After": "5"},
        )

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Record the visit, then hand the request on."""
        client_ip = extract_client_ip(request)

        try:
            await self.service.record_visit(client_ip)
        except StorageError as e:
            logger.error(f"Could not record visit from {client_ip}: {e}")
            if self.fail_on_storage_error:
                return self._create_unavailable_response()

        response: Response = await call_next(request)
        return response
