"""Request-side collaborators: header tables and the request object."""

from .headers import HeaderTable
from .request import Request

__all__ = ["HeaderTable", "Request"]
