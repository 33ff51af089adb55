"""Cross-module enums and type aliases."""

from __future__ import annotations

from enum import Enum
from typing import Literal


class Phase(Enum):
    """Request-processing point at which rules run."""

    EARLY = "early"
    LATE = "late"


class ActionKind(Enum):
    """The closed set of header mutation actions."""

    ADD = "add"
    SET = "set"
    SETIFEMPTY = "setifempty"
    APPEND = "append"
    MERGE = "merge"
    NOTE = "note"


type ItemSelector = Literal["name", "os", "category", "os_version", "version", "vendor"]

# None means DECLINED (continue); an int is an HTTP status that aborts the request.
type HookResult = int | None
