"""Async programming utilities and helpers."""

from __future__ import annotations

import logging
from collections import abc
from functools import wraps
from typing import Any, ParamSpec, TypeVar

from live_notifier.exceptions import ExitRequest


_T = TypeVar("_T")  # type
_P = ParamSpec("_P")  # params

logger = logging.getLogger("LiveNotifier")


def task_wrapper(
    afunc: abc.Callable[_P, abc.Coroutine[Any, Any, _T]],
) -> abc.Callable[_P, abc.Coroutine[Any, Any, _T]]:
    """
    Decorator for long-running async tasks.

    Handles ExitRequest silently, logs other exceptions before re-raising them
    to the wrapping task.
    """

    @wraps(afunc)
    async def wrapper(*args: _P.args, **kwargs: _P.kwargs):
        try:
            await afunc(*args, **kwargs)
        except ExitRequest:
            pass
        except Exception:
            logger.exception(f"Exception in {afunc.__name__} task")
            raise

    return wrapper
