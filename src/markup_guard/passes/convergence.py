"""
Fixed-point iteration with a hard iteration cap.
"""

import logging
from typing import Callable

logger = logging.getLogger("markup_guard.passes")

DEFAULT_MAX_ITERATIONS = 100


def fixed_point(
    transform: Callable[[str], str],
    value: str,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    label: str = "transform",
) -> str:
    """
    Apply ``transform`` until the string stops changing.

    Stops after ``max_iterations`` applications even if the string is
    still changing; the last value is returned and a warning is logged.
    """
    for iteration in range(1, max_iterations + 1):
        new_value = transform(value)
        if new_value == value:
            logger.debug(f"{label} converged after {iteration} iterations")
            return value
        value = new_value

    logger.warning(f"{label} did not converge after {max_iterations} iterations")
    return value
