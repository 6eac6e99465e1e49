from __future__ import annotations

from app.ui.linked import ribbon_from_event


def test_ribbon_from_event_reads_first_selected_ribbon() -> None:
    event = {"selection": {"ribbon": [{"source": "A", "target": "B"}]}}
    assert ribbon_from_event(event) == ("A", "B")


def test_ribbon_from_event_ignores_empty_or_partial_events() -> None:
    assert ribbon_from_event(None) is None
    assert ribbon_from_event({}) is None
    assert ribbon_from_event({"selection": {}}) is None
    assert ribbon_from_event({"selection": {"ribbon": []}}) is None
    assert ribbon_from_event({"selection": {"ribbon": [{"source": "A"}]}}) is None
