"""WSGI middleware that runs the header phases before the wrapped app."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from http import HTTPStatus
from typing import Any

from uaheaders.config import HeaderConfig
from uaheaders.constants.config import NOTES_ENVIRON_KEY
from uaheaders.constants.host import WSGI_HEADER_PREFIX, WSGI_UNPREFIXED_HEADERS
from uaheaders.host.module import HeaderModule
from uaheaders.host.pipeline import HookPipeline
from uaheaders.http import HeaderTable, Request
from uaheaders.types.protocols import Classifier

type Environ = dict[str, Any]
type StartResponse = Callable[..., Any]
type WsgiApp = Callable[[Environ, StartResponse], Iterable[bytes]]


def _header_name(environ_key: str) -> str:
    return "-".join(part.capitalize() for part in environ_key[len(WSGI_HEADER_PREFIX) :].split("_"))


def _environ_key(header_name: str) -> str:
    for key, name in WSGI_UNPREFIXED_HEADERS.items():
        if name.lower() == header_name.lower():
            return key
    return WSGI_HEADER_PREFIX + header_name.upper().replace("-", "_")


def request_from_environ(environ: Environ) -> Request:
    """Build a Request: ``HTTP_*`` keys become headers, other CGI strings the env table."""
    headers = HeaderTable()
    env: dict[str, str] = {}
    for key, value in environ.items():
        if not isinstance(value, str):
            continue
        if key.startswith(WSGI_HEADER_PREFIX):
            headers.add(_header_name(key), value)
        elif key in WSGI_UNPREFIXED_HEADERS:
            if value:
                headers.add(WSGI_UNPREFIXED_HEADERS[key], value)
        elif "." not in key:
            env[key] = value

    return Request(
        headers=headers,
        env=env,
        method=environ.get("REQUEST_METHOD", "GET"),
        path=environ.get("SCRIPT_NAME", "") + environ.get("PATH_INFO", "") or "/",
        query_string=environ.get("QUERY_STRING", ""),
    )


def apply_to_environ(request: Request, environ: Environ) -> None:
    """Write mutated headers back into *environ* and expose the notes.

    WSGI has one slot per header, so repeated names are joined with ``", "``.
    """
    for key in [key for key in environ if key.startswith(WSGI_HEADER_PREFIX) or key in WSGI_UNPREFIXED_HEADERS]:
        del environ[key]

    joined: dict[str, list[str]] = {}
    for name, value in request.headers:
        joined.setdefault(_environ_key(name), []).append(value)
    for key, values in joined.items():
        environ[key] = ", ".join(values)

    environ[NOTES_ENVIRON_KEY] = dict(request.notes)


class UaHeadersMiddleware:
    """Wrap a WSGI application with User-Agent driven request header rules."""

    def __init__(self, app: WsgiApp, config: HeaderConfig, classifier: Classifier | None = None) -> None:
        self._app = app
        self._pipeline = HookPipeline()
        HeaderModule(config, classifier).register_hooks(self._pipeline)

    def __call__(self, environ: Environ, start_response: StartResponse) -> Iterable[bytes]:
        request = request_from_environ(environ)
        status = self._pipeline.process(request)
        if status is not None:
            phrase = HTTPStatus(status).phrase
            start_response(f"{status} {phrase}", [("Content-Type", "text/plain; charset=utf-8")])
            return [phrase.encode("utf-8")]

        apply_to_environ(request, environ)
        return self._app(environ, start_response)
