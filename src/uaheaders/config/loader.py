"""Config loading and normalization for header rules."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from uaheaders.config.directives import ExprCompiler, parse_directive
from uaheaders.config.model import HeaderConfig, normalize_prefix
from uaheaders.constants.config import ALLOWED_CONFIG_KEYS, CONFIG_FILENAME
from uaheaders.exceptions import ConfigError, DirectiveError
from uaheaders.expr import compile_expression
from uaheaders.model import Rule, RuleSet

logger = logging.getLogger(__name__)


def load_config(
    root: Path,
    config_path: Path | None = None,
    *,
    compile_expr: ExprCompiler = compile_expression,
) -> HeaderConfig:
    """Load and validate rules from ``uaheaders.yaml`` or an explicit path."""
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Config file not found: {path}")
        return HeaderConfig()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Failed to read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML config file at {path}: {exc}") from exc

    return build_config(raw, compile_expr=compile_expr)


def build_config(raw: Any, *, compile_expr: ExprCompiler = compile_expression) -> HeaderConfig:
    """Build a HeaderConfig from an already-parsed YAML document."""
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError("Config must be a YAML mapping")

    unknown = sorted(str(key) for key in raw if key not in ALLOWED_CONFIG_KEYS)
    if unknown:
        raise ConfigError(f"Unknown config keys: {unknown}")

    server = _build_scope(raw.get("rules", []), "rules", compile_expr)

    locations_raw = raw.get("locations", {})
    if locations_raw is None:
        locations_raw = {}
    if not isinstance(locations_raw, dict):
        raise ConfigError("locations must be a mapping of path prefix to rule list")

    locations: dict[str, RuleSet] = {}
    for prefix_raw, rules_raw in locations_raw.items():
        if not isinstance(prefix_raw, str) or not prefix_raw.startswith("/"):
            raise ConfigError(f"locations key {prefix_raw!r} must be a path starting with '/'")
        prefix = normalize_prefix(prefix_raw)
        if prefix in locations:
            raise ConfigError(f"Duplicate location prefix: {prefix}")
        locations[prefix] = _build_scope(rules_raw, f"locations.{prefix_raw}", compile_expr)

    return HeaderConfig(server=server, locations=tuple(locations.items()))


def _build_scope(value: Any, key_name: str, compile_expr: ExprCompiler) -> RuleSet:
    rules: list[Rule] = []
    for index, directive in enumerate(_ensure_string_list(value, key_name)):
        try:
            rules.append(parse_directive(directive, compile_expr))
        except DirectiveError as exc:
            raise ConfigError(f"{key_name}[{index}]: {exc}") from exc
    logger.debug("Loaded %d rule(s) for %s", len(rules), key_name)
    return RuleSet(tuple(rules))


def _ensure_string_list(value: Any, key_name: str) -> list[str]:
    """Coerce a value to a list of strings, raising ConfigError on type mismatch."""
    if value is None:
        return []
    if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{key_name} must be a list of strings")
    return list(value)
