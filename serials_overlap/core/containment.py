"""Interval containment between an investigated holding and a candidate."""

from __future__ import annotations

from .types import Holding


def is_covered_by(investigated: Holding, candidate: Holding | None) -> bool:
    """Return True if the candidate's interval contains the investigated one.

    Comparisons use effective (post-override, post-embargo) dates. A missing
    candidate or any undefined bound yields False.
    """
    if candidate is None:
        return False
    if investigated.effective_begin is None or investigated.effective_end is None:
        return False
    if candidate.effective_begin is None or candidate.effective_end is None:
        return False
    return (
        investigated.effective_begin >= candidate.effective_begin
        and investigated.effective_end <= candidate.effective_end
    )
