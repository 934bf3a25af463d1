from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import Iterator

from sharplisp.config import get_recursion_limit
from sharplisp.errors import SharpRecursionError

logger = logging.getLogger(__name__)


@contextmanager
def recursion_guard(activity: str) -> Iterator[None]:
    """Run a recursive parse/evaluation, surfacing stack exhaustion as SharpRecursionError.

    The interpreter recursion limit is set to the configured one (raised or
    lowered) for the duration of the block and restored afterwards.
    """
    previous = sys.getrecursionlimit()
    try:
        # setrecursionlimit itself raises RecursionError when set below the current depth
        sys.setrecursionlimit(get_recursion_limit())
        yield
    except RecursionError as ex:
        logger.debug("Recursion limit exhausted during %s", activity)
        raise SharpRecursionError(f"Recursion limit exhausted during {activity}") from ex
    finally:
        sys.setrecursionlimit(previous)
