"""HTTP servers used by the web adapter."""

from visit_counter.adapters.web.servers.static_file_server import (
    StaticFileCacheApp,
    StaticFileServer,
)

__all__ = ["StaticFileCacheApp", "StaticFileServer"]
