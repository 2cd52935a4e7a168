"""Web adapters for serving the site and counting visits."""

from visit_counter.adapters.web.client_info import extract_client_ip
from visit_counter.adapters.web.starlette_app import WebAdapter
from visit_counter.adapters.web.visit_tracking_middleware import VisitTrackingMiddleware

__all__ = ["VisitTrackingMiddleware", "WebAdapter", "extract_client_ip"]
