"""Hook extension points, ordering, and WSGI mapping constants."""

from __future__ import annotations

POST_READ_REQUEST: str = "post_read_request"
FIXUPS: str = "fixups"
HOOK_POINTS: tuple[str, ...] = (POST_READ_REQUEST, FIXUPS)

HOOK_FIRST: int = 0
HOOK_MIDDLE: int = 10
HOOK_LAST: int = 20

HTTP_INTERNAL_SERVER_ERROR: int = 500

WSGI_HEADER_PREFIX: str = "HTTP_"
WSGI_UNPREFIXED_HEADERS: dict[str, str] = {
    "CONTENT_TYPE": "Content-Type",
    "CONTENT_LENGTH": "Content-Length",
}
