"""HTTP query server: a single read-only report route."""

from infrastructure.http.app import ListenerStartupError, create_app, serve

__all__ = [
    "create_app",
    "serve",
    "ListenerStartupError",
]
