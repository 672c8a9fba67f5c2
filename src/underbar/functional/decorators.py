"""Function decorators: call-once, memoization and timer based deferral.

``once`` and ``memoize`` keep their state in the closure of the function they
return, so every decorated function owns an independent guard or cache.
``delay`` and ``throttle`` hand work to ``threading.Timer``; they are the only
helpers in the package that run code outside the caller's thread.
"""

import functools
import threading
import time
import typing as tp

from pydantic import TypeAdapter

from underbar.core.config import settings
from underbar.core.types import Waitable, strict_type
from underbar.logger.logger import logger

__all__ = ["once", "memoize", "delay", "throttle"]

_wait_adapter = TypeAdapter(Waitable)


def _name(fn: tp.Callable) -> str:
    return getattr(fn, "__name__", repr(fn))


def _timer(seconds: float, fn: tp.Callable, args: tp.Sequence = ()) -> threading.Timer:
    timer = threading.Timer(seconds, fn, args=list(args))
    timer.daemon = settings.TIMER_DAEMON
    timer.start()
    return timer


def once(fn: tp.Callable) -> tp.Callable:
    """Return a function that calls ``fn`` on its first invocation only.

    Later calls, whatever their arguments, return the first result without
    calling ``fn`` again. If the first call raises, nothing is cached and the
    next call tries again.
    """
    called = False
    result = None

    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        nonlocal called, result
        if not called:
            logger.debug(f"once({_name(fn)}): first call")
            result = fn(*args, **kwargs)
            called = True
        return result

    return wrapper


def memoize(fn: tp.Callable[[tp.Any], tp.Any]) -> tp.Callable[[tp.Any], tp.Any]:
    """Cache the results of a single-argument function.

    The argument must be hashable. Entries are keyed by the argument's strict
    type and value, so ``1`` and ``1.0`` share an entry while ``True`` gets its
    own. The cache is unbounded and is available as the ``cache`` attribute of
    the returned function.

    Example:
        >>> square = memoize(lambda n: n * n)
        >>> square(4)
        16
        >>> square.cache
        {(<class 'float'>, 4): 16}
    """
    cache: tp.Dict[tp.Tuple[type, tp.Any], tp.Any] = {}

    @functools.wraps(fn)
    def wrapper(arg):
        key = (strict_type(arg), arg)
        if key in cache:
            return cache[key]
        logger.debug(f"memoize({_name(fn)}): cache miss for {arg!r}")
        cache[key] = fn(arg)
        return cache[key]

    wrapper.cache = cache
    return wrapper


def delay(fn: tp.Callable, wait_ms: float, *args: tp.Any) -> threading.Timer:
    """Call ``fn(*args)`` once, no sooner than ``wait_ms`` milliseconds from now.

    Returns immediately with the started ``threading.Timer``; ``cancel()`` it
    to drop the call or ``join()`` it to wait for completion. Equal delays
    carry no ordering guarantee.

    Args:
        fn: Callable to run on the timer thread.
        wait_ms: Non-negative delay in milliseconds.
        *args: Positional arguments forwarded to ``fn``.

    Raises:
        pydantic.ValidationError: If ``wait_ms`` is negative or not a number.
    """
    wait = _wait_adapter.validate_python(wait_ms)
    logger.debug(f"delay({_name(fn)}): scheduled in {wait} ms")
    return _timer(wait / 1000, fn, args)


def throttle(fn: tp.Callable, wait_ms: float) -> tp.Callable:
    """Return a function that runs ``fn`` at most once every ``wait_ms``.

    The first call runs ``fn`` immediately. Calls arriving inside the window
    return the most recent result and schedule one trailing call, made with
    the latest arguments when the window closes. The returned function has a
    ``cancel()`` method dropping any pending trailing call.

    Raises:
        pydantic.ValidationError: If ``wait_ms`` is negative or not a number.
    """
    wait = _wait_adapter.validate_python(wait_ms) / 1000
    lock = threading.Lock()
    last_run: tp.Optional[float] = None
    result = None
    pending: tp.Optional[threading.Timer] = None
    pending_call: tp.Tuple[tuple, dict] = ((), {})

    def _run(args, kwargs):
        nonlocal result
        value = fn(*args, **kwargs)
        with lock:
            result = value
        return value

    def _trailing():
        nonlocal last_run, pending
        with lock:
            args, kwargs = pending_call
            pending = None
            last_run = time.monotonic()
        logger.debug(f"throttle({_name(fn)}): trailing call")
        _run(args, kwargs)

    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        nonlocal last_run, pending, pending_call
        with lock:
            now = time.monotonic()
            if pending is None and (last_run is None or now - last_run >= wait):
                last_run = now
                run_now = True
            else:
                run_now = False
                pending_call = (args, kwargs)
                if pending is None:
                    remaining = max(wait - (now - last_run), 0.0)
                    pending = _timer(remaining, _trailing)
                cached = result
        if run_now:
            return _run(args, kwargs)
        return cached

    def cancel() -> None:
        nonlocal pending
        with lock:
            if pending is not None:
                pending.cancel()
                pending = None

    wrapper.cancel = cancel
    return wrapper
