import threading
import time

import pytest
from pydantic import ValidationError
from underbar import delay, memoize, once, throttle


@pytest.fixture
def counter():
    calls = []

    def record(*args, **kwargs):
        calls.append((args, kwargs))
        return len(calls)

    record.calls = calls
    return record


def test_once_calls_underlying_function_once(counter):
    wrapped = once(counter)

    assert wrapped(1) == 1
    assert wrapped(2, key="x") == 1
    assert wrapped() == 1
    assert counter.calls == [((1,), {})]


def test_once_instances_are_independent(counter):
    first = once(counter)
    second = once(counter)

    assert first() == 1
    assert second() == 2
    assert first() == 1


def test_once_retries_after_exception():
    attempts = []

    def flaky():
        attempts.append(1)
        if len(attempts) == 1:
            raise RuntimeError("first call fails")
        return "ok"

    wrapped = once(flaky)
    with pytest.raises(RuntimeError):
        wrapped()
    assert wrapped() == "ok"
    assert wrapped() == "ok"
    assert len(attempts) == 2


def test_once_binds_as_method():
    class Greeter:
        def __init__(self, name):
            self.name = name

        @once
        def greet(self):
            return f"hello {self.name}"

    assert Greeter("moe").greet() == "hello moe"
    # The guard belongs to the decorated function, not to each instance
    assert Greeter("larry").greet() == "hello moe"


def test_once_preserves_metadata():
    def add(a, b):
        """Add two numbers."""
        return a + b

    wrapped = once(add)
    assert wrapped.__name__ == "add"
    assert wrapped.__doc__ == "Add two numbers."


def test_memoize_caches_by_argument():
    calls = []

    def square(n):
        calls.append(n)
        return n * n

    fast = memoize(square)

    assert fast(4) == 16
    assert fast(4) == 16
    assert calls == [4]

    assert fast(5) == 25
    assert calls == [4, 5]


def test_memoize_shares_numbers_but_not_booleans():
    calls = []

    def kind(value):
        calls.append(value)
        return type(value).__name__

    fast = memoize(kind)

    assert fast(1) == "int"
    assert fast(1.0) == "int"
    assert fast(True) == "bool"
    assert calls == [1, True]
    assert len(fast.cache) == 2


def test_memoize_caches_none_results():
    calls = []

    def nothing(value):
        calls.append(value)
        return None

    fast = memoize(nothing)
    assert fast("a") is None
    assert fast("a") is None
    assert calls == ["a"]


def test_memoize_instances_do_not_share_cache():
    double = memoize(lambda n: n * 2)
    triple = memoize(lambda n: n * 3)

    assert double(3) == 6
    assert triple(3) == 9
    assert double.cache is not triple.cache


def test_delay_calls_function_with_arguments():
    received = []
    done = threading.Event()

    def target(a, b):
        received.append((a, b))
        done.set()

    timer = delay(target, 10, "a", "b")

    assert isinstance(timer, threading.Timer)
    assert done.wait(timeout=2)
    assert received == [("a", "b")]


def test_delay_returns_before_running():
    done = threading.Event()
    timer = delay(done.set, 200)

    assert not done.is_set()
    timer.join(timeout=2)
    assert done.is_set()


def test_delay_can_be_cancelled():
    done = threading.Event()
    timer = delay(done.set, 10_000)
    timer.cancel()
    timer.join(timeout=2)

    assert not done.is_set()


@pytest.mark.parametrize("wait", [-1, "soon"])
def test_delay_rejects_invalid_wait(wait):
    with pytest.raises(ValidationError):
        delay(lambda: None, wait)


def test_throttle_runs_leading_and_trailing_calls():
    calls = []
    trailing_done = threading.Event()

    def work(value):
        calls.append(value)
        if len(calls) == 2:
            trailing_done.set()
        return value * 10

    throttled = throttle(work, 500)

    assert throttled(1) == 10
    assert throttled(2) == 10
    assert throttled(3) == 10
    assert trailing_done.wait(timeout=3)
    assert calls == [1, 3]


def test_throttle_cancel_drops_trailing_call():
    calls = []
    throttled = throttle(calls.append, 200)

    throttled("leading")
    throttled("trailing")
    throttled.cancel()

    time.sleep(0.4)
    assert calls == ["leading"]


def test_throttle_rejects_negative_wait():
    with pytest.raises(ValidationError):
        throttle(lambda: None, -5)
