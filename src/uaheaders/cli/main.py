"""CLI entrypoint for uaheaders."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from uaheaders import __version__
from uaheaders.classifier import default_classifier
from uaheaders.config import load_config
from uaheaders.constants.actions import USER_AGENT_HEADER
from uaheaders.constants.branding import CLI_DESCRIPTION
from uaheaders.engine import PhaseRunner
from uaheaders.exceptions import ConfigError, UaHeadersError
from uaheaders.exceptions.validation import format_errors
from uaheaders.http import HeaderTable, Request
from uaheaders.types.common import Phase
from uaheaders.validation import preflight_validate

PHASE_CHOICES: dict[str, tuple[Phase, ...]] = {
    "early": (Phase.EARLY,),
    "late": (Phase.LATE,),
    "both": (Phase.EARLY, Phase.LATE),
}


def build_parser() -> argparse.ArgumentParser:
    """Build top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="uaheaders",
        description=CLI_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    validate = subparsers.add_parser("validate-config", help="Validate header rule configuration")
    validate.add_argument("-r", "--root", type=Path, default=Path("."), help="Directory holding uaheaders.yaml")
    validate.add_argument("-c", "--config", type=Path, help="Explicit config file")
    validate.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    apply = subparsers.add_parser("apply", help="Run header rules against a sample request")
    apply.add_argument("-r", "--root", type=Path, default=Path("."), help="Directory holding uaheaders.yaml")
    apply.add_argument("-c", "--config", type=Path, help="Explicit config file")
    apply.add_argument("-u", "--user-agent", default=None, help="User-Agent header value")
    apply.add_argument(
        "-H",
        "--header",
        action="append",
        default=[],
        help="Extra request header as 'Name: value' (repeat flag for multiple values)",
    )
    apply.add_argument(
        "-e",
        "--env",
        action="append",
        default=[],
        help="Request environment variable as NAME or NAME=VALUE (repeat flag for multiple values)",
    )
    apply.add_argument("-p", "--path", default="/", help="Request path used to select location rules")
    apply.add_argument("-m", "--method", default="GET", help="Request method")
    apply.add_argument("-q", "--query", default="", help="Query string")
    apply.add_argument("--phase", choices=sorted(PHASE_CHOICES), default="both", help="Phase(s) to run")
    apply.add_argument("--json", action="store_true", help="Print the result as JSON")
    apply.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(message)s")

    if args.command == "validate-config":
        return _handle_validate_config(args)
    if args.command != "apply":
        parser.error(f"Unsupported command: {args.command}")

    validation_errors = preflight_validate(root=args.root, config_path=args.config)
    if validation_errors:
        print(format_errors(validation_errors), file=sys.stderr)
        return 2

    try:
        config = load_config(args.root, args.config)
        request = _build_request(args)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    except UaHeadersError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    runner = PhaseRunner(default_classifier())
    for phase in PHASE_CHOICES[args.phase]:
        runner.run(config.ruleset_for_phase(phase, request.path), phase, request)

    print(_render(request, as_json=args.json))
    return 0


def _handle_validate_config(args: argparse.Namespace) -> int:
    """Run config validation and report results."""
    errors = preflight_validate(root=args.root, config_path=args.config)
    if errors:
        print(format_errors(errors), file=sys.stderr)
        return 2

    print("Configuration is valid.")
    return 0


def _build_request(args: argparse.Namespace) -> Request:
    headers = HeaderTable()
    if args.user_agent is not None:
        headers.add(USER_AGENT_HEADER, args.user_agent)
    for raw in args.header:
        name, sep, value = raw.partition(":")
        if not sep or not name.strip():
            raise ConfigError(f"--header expects 'Name: value', got {raw!r}")
        headers.add(name.strip(), value.strip())

    env: dict[str, str] = {}
    for raw in args.env:
        name, _, value = raw.partition("=")
        if not name:
            raise ConfigError(f"--env expects NAME or NAME=VALUE, got {raw!r}")
        env[name] = value

    return Request(
        headers=headers,
        env=env,
        method=args.method.upper(),
        path=args.path,
        query_string=args.query,
    )


def _render(request: Request, *, as_json: bool) -> str:
    if as_json:
        payload = {
            "headers": [[name, value] for name, value in request.headers],
            "notes": request.notes,
        }
        return json.dumps(payload, indent=2)

    lines = [f"{name}: {value}" for name, value in request.headers]
    if request.notes:
        lines.append("")
        lines.append("Notes:")
        lines.extend(f"  {key} = {value if value is not None else '(unset)'}" for key, value in request.notes.items())
    return "\n".join(lines)


if __name__ == "__main__":
    raise SystemExit(main())
