"""Tests for phase execution of rule sets."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import pytest

from uaheaders.engine import PhaseRunner, run_phase
from uaheaders.http import HeaderTable, Request
from uaheaders.model import Classification, EarlyPhase, EnvCondition, Rule, RuleSet
from uaheaders.types.common import ActionKind, Phase

FIREFOX_UA = "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:118.0) Gecko/20100101 Firefox/118.0"


def _rules(*rules: Rule) -> RuleSet:
    return RuleSet(tuple(rules))


def test_add_item_adds_one_entry(make_request: Callable[..., Request], stub_classifier: Any) -> None:
    request = make_request([("User-Agent", FIREFOX_UA), ("Accept", "*/*")])
    ruleset = _rules(Rule(ActionKind.ADD, "X-UA-Name", "name"))

    assert run_phase(ruleset, Phase.LATE, request, stub_classifier) is True

    assert request.headers.items() == [
        ("User-Agent", FIREFOX_UA),
        ("Accept", "*/*"),
        ("X-UA-Name", "Firefox"),
    ]
    assert stub_classifier.calls == [FIREFOX_UA]


def test_missing_user_agent_yields_empty_value_without_classifying(stub_classifier: Any) -> None:
    request = Request()
    ruleset = _rules(Rule(ActionKind.ADD, "X-UA-Name", "name"))

    run_phase(ruleset, Phase.LATE, request, stub_classifier)

    assert request.headers.items() == [("X-UA-Name", "")]
    assert stub_classifier.calls == []


def test_empty_ruleset_does_nothing(stub_classifier: Any) -> None:
    request = Request(headers=HeaderTable([("User-Agent", FIREFOX_UA)]))

    assert run_phase(RuleSet(), Phase.LATE, request, stub_classifier) is True

    assert stub_classifier.calls == []
    assert len(request.headers) == 1


def test_classifies_once_per_phase(stub_classifier: Any) -> None:
    request = Request(headers=HeaderTable([("User-Agent", FIREFOX_UA)]))
    ruleset = _rules(
        Rule(ActionKind.SET, "X-UA-Name", "name"),
        Rule(ActionKind.SET, "X-UA-OS", "os"),
        Rule(ActionKind.SET, "X-UA-Vendor", "vendor"),
    )

    run_phase(ruleset, Phase.LATE, request, stub_classifier)
    run_phase(ruleset, Phase.EARLY, request, stub_classifier)

    assert stub_classifier.calls == [FIREFOX_UA, FIREFOX_UA]
    assert request.headers.get("X-UA-OS") == "Windows 10"
    assert request.headers.get("X-UA-Vendor") == "Mozilla"


def test_no_classification_when_no_rule_is_active(stub_classifier: Any) -> None:
    request = Request(headers=HeaderTable([("User-Agent", FIREFOX_UA)]))
    ruleset = _rules(Rule(ActionKind.ADD, "X-UA-Name", "name", EarlyPhase()))

    run_phase(ruleset, Phase.LATE, request, stub_classifier)

    assert stub_classifier.calls == []
    assert "X-UA-Name" not in request.headers


def test_user_agent_is_read_before_rules_run(stub_classifier: Any) -> None:
    request = Request(headers=HeaderTable([("User-Agent", FIREFOX_UA)]))
    ruleset = _rules(
        Rule(ActionKind.SET, "User-Agent", "os"),
        Rule(ActionKind.ADD, "X-UA-Name", "name"),
    )

    run_phase(ruleset, Phase.LATE, request, stub_classifier)

    assert stub_classifier.calls == [FIREFOX_UA]
    assert request.headers.get("User-Agent") == "Windows 10"
    assert request.headers.get("X-UA-Name") == "Firefox"


def test_unclassifiable_agent_and_unknown_item_resolve_to_empty(
    stub_classifier_factory: Callable[[Classification | None], Any],
) -> None:
    classifier = stub_classifier_factory(None)
    request = Request(headers=HeaderTable([("User-Agent", "???")]))
    ruleset = _rules(Rule(ActionKind.ADD, "X-UA-Name", "name"))

    run_phase(ruleset, Phase.LATE, request, classifier)

    assert request.headers.get("X-UA-Name") == ""

    partial = stub_classifier_factory(Classification(name="Firefox"))
    request = Request(headers=HeaderTable([("User-Agent", "x")]))
    ruleset = _rules(Rule(ActionKind.ADD, "X-A", "browser"), Rule(ActionKind.ADD, "X-B", "os"))

    run_phase(ruleset, Phase.LATE, request, partial)

    assert request.headers.get("X-A") == ""
    assert request.headers.get("X-B") == ""


def test_phases_select_their_rules(stub_classifier: Any) -> None:
    ruleset = _rules(
        Rule(ActionKind.ADD, "X-Early", "name", EarlyPhase()),
        Rule(ActionKind.ADD, "X-Env", "os", EnvCondition("API_CLIENT")),
    )
    request = Request(headers=HeaderTable([("User-Agent", FIREFOX_UA)]), env={"API_CLIENT": "1"})

    run_phase(ruleset, Phase.EARLY, request, stub_classifier)

    assert request.headers.get("X-Early") == "Firefox"
    assert "X-Env" not in request.headers

    run_phase(ruleset, Phase.LATE, request, stub_classifier)

    assert request.headers.get_all("X-Early") == ["Firefox"]
    assert request.headers.get("X-Env") == "Windows 10"


def test_merge_twice_keeps_single_token(stub_classifier: Any) -> None:
    request = Request(headers=HeaderTable([("User-Agent", FIREFOX_UA), ("Vary", "Firefox")]))
    ruleset = _rules(Rule(ActionKind.MERGE, "Vary", "name"))

    run_phase(ruleset, Phase.LATE, request, stub_classifier)
    run_phase(ruleset, Phase.LATE, request, stub_classifier)

    assert request.headers.get_all("Vary") == ["Firefox"]


def test_outer_rules_run_before_inner_rules(stub_classifier: Any) -> None:
    outer = _rules(Rule(ActionKind.SET, "X-Order", "name"))
    inner = _rules(Rule(ActionKind.APPEND, "X-Order", "os"))
    request = Request(headers=HeaderTable([("User-Agent", FIREFOX_UA)]))

    effective = outer.merge(inner)
    PhaseRunner(stub_classifier).run(effective, Phase.LATE, request)

    assert [rule.header_name for rule in effective] == ["X-Order", "X-Order"]
    assert request.headers.get("X-Order") == "Firefox, Windows 10"


def test_explicit_header_table_is_mutated_instead_of_request_headers(stub_classifier: Any) -> None:
    request = Request(headers=HeaderTable([("User-Agent", "ignored")]))
    target = HeaderTable([("User-Agent", FIREFOX_UA)])

    run_phase(_rules(Rule(ActionKind.ADD, "X-UA-Name", "name")), Phase.LATE, request, stub_classifier, target)

    assert stub_classifier.calls == [FIREFOX_UA]
    assert target.get("X-UA-Name") == "Firefox"
    assert "X-UA-Name" not in request.headers


def test_unconditional_rule_runs_in_both_phases(stub_classifier: Any) -> None:
    request = Request(headers=HeaderTable([("User-Agent", FIREFOX_UA)]))
    ruleset = _rules(Rule(ActionKind.ADD, "X-UA-Name", "name"))

    run_phase(ruleset, Phase.EARLY, request, stub_classifier)
    run_phase(ruleset, Phase.LATE, request, stub_classifier)

    assert request.headers.get_all("X-UA-Name") == ["Firefox", "Firefox"]


def test_skipped_rules_are_logged_at_debug(stub_classifier: Any, caplog: pytest.LogCaptureFixture) -> None:
    ruleset = _rules(Rule(ActionKind.SET, "X-Early", "name", EarlyPhase()))
    request = Request(headers=HeaderTable([("User-Agent", FIREFOX_UA)]))

    with caplog.at_level(logging.DEBUG, logger="uaheaders.engine.runner"):
        run_phase(ruleset, Phase.LATE, request, stub_classifier)

    assert "Skipping set X-Early in the late phase" in caplog.text
    assert "X-Early" not in request.headers
