"""Tests for calculation timeline stage events."""

from datetime import datetime

from pnl_ledger.domain import domain_build_stage_event


def test_domain_build_stage_event_includes_details_only_when_present() -> None:
    """Build UTC-stamped stage events with optional details.

    Returns:
        None: Assertions validate event payload shape.

    Raises:
        AssertionError: Raised when event fields deviate.
    """

    started_event = domain_build_stage_event("parse", "started")
    completed_event = domain_build_stage_event("parse", "completed", {"trades": 3, "skipped": 1})

    assert set(started_event) == {"stage", "status", "at_utc"}
    assert started_event["stage"] == "parse"
    assert datetime.fromisoformat(started_event["at_utc"]).utcoffset().total_seconds() == 0
    assert completed_event["details"] == {"trades": 3, "skipped": 1}
    assert "details" not in domain_build_stage_event("match", "started", {})
