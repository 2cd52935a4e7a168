"""Ports (interfaces) for the ports-and-adapters architecture."""

from visit_counter.domain.ports.visitor_repository import VisitorRepository

__all__ = ["VisitorRepository"]
