"""Application services."""

from visit_counter.application.services.visit_tracking_service import VisitTrackingService

__all__ = ["VisitTrackingService"]
