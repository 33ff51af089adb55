"""Config file validation for header rules."""

from __future__ import annotations

import difflib
from pathlib import Path
from typing import Any

import yaml

from uaheaders.config.directives import parse_directive
from uaheaders.config.model import normalize_prefix
from uaheaders.constants.config import ALLOWED_CONFIG_KEYS, CONFIG_FILENAME
from uaheaders.constants.validation import CFG001, CFG002, CFG003, CFG004, CFG005, CFG006, CFG007, CFG008
from uaheaders.exceptions import DirectiveError
from uaheaders.exceptions.validation import ValidationError


def validate_config_file(
    root: Path,
    config_path: Path | None = None,
    *,
    config_explicit: bool = False,
) -> list[ValidationError]:
    """Validate a uaheaders.yaml file and return all validation errors.

    This is the collect-all entry point used by ``uaheaders validate-config``
    and by ``uaheaders apply`` preflight. It never raises; all problems are
    returned as :class:`ValidationError` instances.
    """
    errors: list[ValidationError] = []
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    path_str = str(path)

    if not path.exists():
        if config_explicit:
            errors.append(
                ValidationError(
                    code=CFG001,
                    path=path_str,
                    field="",
                    message=f"config file not found: {path}",
                )
            )
        return errors

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        errors.append(
            ValidationError(
                code=CFG002,
                path=path_str,
                field="",
                message=f"invalid YAML: {exc}",
            )
        )
        return errors

    if raw is None:
        return errors

    if not isinstance(raw, dict):
        errors.append(
            ValidationError(
                code=CFG003,
                path=path_str,
                field="",
                message=f"config must be a YAML mapping, got {type(raw).__name__}",
            )
        )
        return errors

    for key in sorted(str(k) for k in raw):
        if key not in ALLOWED_CONFIG_KEYS:
            errors.append(
                ValidationError(
                    code=CFG004,
                    path=path_str,
                    field=key,
                    message=f"unknown key `{key}`",
                    hint=_suggest_key(key, ALLOWED_CONFIG_KEYS),
                )
            )

    if "rules" in raw:
        _validate_directives(raw["rules"], "rules", path_str, errors)

    if "locations" in raw and raw["locations"] is not None:
        locations = raw["locations"]
        if not isinstance(locations, dict):
            errors.append(
                ValidationError(
                    code=CFG005,
                    path=path_str,
                    field="locations",
                    message="invalid type for `locations`",
                    hint="expected a mapping of path prefix to a list of directives",
                )
            )
        else:
            seen: set[str] = set()
            for prefix, directives in locations.items():
                field = f"locations.{prefix}"
                if not isinstance(prefix, str) or not prefix.startswith("/"):
                    errors.append(
                        ValidationError(
                            code=CFG007,
                            path=path_str,
                            field=field,
                            message=f"location prefix {prefix!r} must start with '/'",
                        )
                    )
                    continue
                normalized = normalize_prefix(prefix)
                if normalized in seen:
                    errors.append(
                        ValidationError(
                            code=CFG008,
                            path=path_str,
                            field=field,
                            message=f"duplicate location prefix: {normalized}",
                        )
                    )
                seen.add(normalized)
                _validate_directives(directives, field, path_str, errors)

    return errors


def _validate_directives(value: Any, field: str, path_str: str, errors: list[ValidationError]) -> None:
    if value is None:
        return
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        errors.append(
            ValidationError(
                code=CFG005,
                path=path_str,
                field=field,
                message=f"invalid type for `{field}`",
                hint="expected a list of directive strings",
            )
        )
        return

    for index, directive in enumerate(value):
        try:
            parse_directive(directive)
        except DirectiveError as exc:
            errors.append(
                ValidationError(
                    code=CFG006,
                    path=path_str,
                    field=f"{field}[{index}]",
                    message=str(exc),
                )
            )


def _suggest_key(unknown: str, allowed: frozenset[str]) -> str:
    """Return a 'did you mean ...' hint for a close key match, or empty string."""
    matches = difflib.get_close_matches(unknown, sorted(allowed), n=1, cutoff=0.6)
    if matches:
        return f"did you mean `{matches[0]}`?"
    return ""
