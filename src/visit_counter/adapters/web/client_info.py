"""Client address extraction for incoming requests."""

import logging

from starlette.requests import Request

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT = "unknown"


def extract_client_ip(request: Request) -> str:
    """Extract client IP address from request, supporting X-Forwarded-For header.

    X-Forwarded-For may carry a chain (client, proxy1, proxy2); the first entry
    is the original client. Without the header the direct connection address is used.
    """
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        client_ip = forwarded_for.split(",")[0].strip()
        if client_ip:
            return client_ip

    if request.client and request.client.host:
        return request.client.host

    logger.warning(f"Could not determine client IP, using '{UNKNOWN_CLIENT}'")
    return UNKNOWN_CLIENT
