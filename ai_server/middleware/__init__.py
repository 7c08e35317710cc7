# ai_server/middleware/__init__.py
from ai_server.middleware.request_context import RequestContextMiddleware

__all__ = ["RequestContextMiddleware"]
