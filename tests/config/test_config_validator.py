"""Tests for collect-all config validation."""

from __future__ import annotations

from pathlib import Path

from uaheaders.config import validate_config_file
from uaheaders.constants.validation import CFG001, CFG002, CFG003, CFG004, CFG005, CFG006, CFG007, CFG008, CFG010
from uaheaders.exceptions.validation import format_errors
from uaheaders.validation import preflight_validate


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "uaheaders.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_valid_config_has_no_errors(tmp_path: Path) -> None:
    _write(tmp_path, "rules:\n  - add X-UA-Name name\nlocations:\n  /api:\n    - set X os env=!FOO\n")

    assert validate_config_file(tmp_path) == []


def test_missing_config_only_errors_when_explicit(tmp_path: Path) -> None:
    assert validate_config_file(tmp_path) == []

    errors = validate_config_file(tmp_path, tmp_path / "nope.yaml", config_explicit=True)

    assert [e.code for e in errors] == [CFG001]


def test_yaml_and_shape_errors(tmp_path: Path) -> None:
    assert [e.code for e in validate_config_file(tmp_path, _write(tmp_path, "rules: [x\n"))] == [CFG002]
    assert [e.code for e in validate_config_file(tmp_path, _write(tmp_path, "- a\n"))] == [CFG003]


def test_collects_every_problem(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        "rule: []\n"
        "rules:\n  - add X name\n  - drop X name\n  - add X name later\n"
        "locations:\n  api:\n    - add X name\n  /ok:\n    - add Y\n  /bad: 3\n",
    )

    errors = validate_config_file(tmp_path, path)
    by_field = {e.field: e for e in errors}

    assert by_field["rule"].code == CFG004
    assert by_field["rule"].hint == "did you mean `rules`?"
    assert by_field["rules[1]"].code == CFG006
    assert by_field["rules[2]"].message == "Unknown parameter: later"
    assert by_field["locations.api"].code == CFG007
    assert by_field["locations./ok[0]"].message == "Header requires three arguments"
    assert by_field["locations./bad"].code == CFG005
    assert len(errors) == 6


def test_prefixes_equal_after_normalization_are_duplicates(tmp_path: Path) -> None:
    path = _write(tmp_path, "locations:\n  /api:\n    - set X os\n  /api/:\n    - set Y os\n")

    errors = validate_config_file(tmp_path, path)

    assert [(e.code, e.field) for e in errors] == [(CFG008, "locations./api/")]
    assert errors[0].message == "duplicate location prefix: /api"


def test_format_errors_is_sorted_and_readable(tmp_path: Path) -> None:
    path = _write(tmp_path, "rules:\n  - nope X name\nextra: 1\n")

    text = format_errors(validate_config_file(tmp_path, path))

    lines = text.splitlines()
    resolved = path.resolve()
    assert lines[0].startswith(f"[{CFG004}] {resolved}:extra unknown key `extra`")
    assert lines[1].startswith(f"[{CFG006}] {resolved}:rules[0] first argument must be")


def test_preflight_reports_missing_root(tmp_path: Path) -> None:
    errors = preflight_validate(tmp_path / "missing")

    assert [e.code for e in errors] == [CFG010]


def test_preflight_passes_through_config_errors(tmp_path: Path) -> None:
    path = _write(tmp_path, "locations: nope\n")

    assert [e.code for e in preflight_validate(tmp_path, path)] == [CFG005]


def test_deeply_nested_expression_is_reported_not_raised(tmp_path: Path) -> None:
    nested = "(" * 300 + "true" + ")" * 300
    path = _write(tmp_path, f"rules:\n  - \"add X name 'expr={nested}'\"\n")

    errors = validate_config_file(tmp_path, path)

    assert [(e.code, e.field) for e in errors] == [(CFG006, "rules[0]")]
    assert "nested too deeply" in errors[0].message
