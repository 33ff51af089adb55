"""Host-side integration: hook pipeline, header module, WSGI adapter."""

from .module import HeaderModule
from .pipeline import HookPipeline
from .wsgi import UaHeadersMiddleware, apply_to_environ, request_from_environ

__all__ = [
    "HeaderModule",
    "HookPipeline",
    "UaHeadersMiddleware",
    "apply_to_environ",
    "request_from_environ",
]
