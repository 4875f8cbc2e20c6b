from __future__ import annotations

import pytest

from logsmith.core.events import Event


def test_handlers_run_in_subscription_order() -> None:
    calls: list[tuple[str, int]] = []
    event = Event()
    event.subscribe(lambda n: calls.append(("a", n)))
    second = event.subscribe(lambda n: calls.append(("b", n)))

    event.emit(1)
    event.unsubscribe(second)
    event.unsubscribe(second)
    event.emit(2)

    assert calls == [("a", 1), ("b", 1), ("a", 2)]
    assert len(event) == 1


def test_handler_errors_propagate() -> None:
    event = Event()

    @event.subscribe
    def _boom() -> None:
        raise RuntimeError("handler failed")

    with pytest.raises(RuntimeError):
        event.emit()
