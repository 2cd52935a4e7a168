"""Configuration adapters."""

from visit_counter.adapters.config.app_config import AppConfig

__all__ = ["AppConfig"]
