"""Application layer - use cases built on domain ports."""

from visit_counter.application.services import VisitTrackingService

__all__ = ["VisitTrackingService"]
