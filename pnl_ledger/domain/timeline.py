"""Stage event helper for calculation diagnostics."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any


def domain_build_stage_event(stage: str, status: str, details: dict[str, Any] | None = None) -> dict[str, Any]:
    """Build one stage event for a calculation timeline.

    Args:
        stage: Stage name (`read`, `parse`, `match`).
        status: Stage status marker.
        details: Optional counters or error code; omitted when empty.

    Returns:
        dict[str, Any]: Stage event stamped with the current UTC time.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    stage_event: dict[str, Any] = {"stage": stage, "status": status, "at_utc": datetime.now(timezone.utc).isoformat()}
    if details:
        stage_event["details"] = details
    return stage_event
