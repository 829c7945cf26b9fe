import os

from mandel import infra


def test_cpu_count_positive(monkeypatch):
    assert infra.cpu_count() >= 1
    monkeypatch.setattr(os, "cpu_count", lambda: None)
    assert infra.cpu_count() == 1


def test_time_call_returns_result_and_elapsed():
    def add(a, b, scale=1):
        return (a + b) * scale

    timed = infra.time_call(add, 2, 3, scale=2)
    assert timed.result == 10
    assert timed.seconds >= 0.0
    assert timed.label == "add"
    assert "add executed in" in timed.report()


def test_time_call_custom_label():
    timed = infra.time_call(lambda: None, label="grid")
    assert timed.result is None
    assert timed.report().startswith("grid executed in")
