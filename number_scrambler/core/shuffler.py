"""
Shuffled List Generation.

This module produces the integers 1..n in uniformly random order. Two
algorithms are available:

- ``fisher_yates``: the in-place swap form, O(n). Used by default.
- ``draw_and_remove``: draws from a shrinking pool of the remaining values
  until it is empty. O(n^2) on a list, kept for comparison.

Both give every one of the n! orderings the same probability. The random
source is created per call unless one is passed in, so nothing here holds
global random state.
"""

import logging
import random
from dataclasses import dataclass
from typing import List, Optional

from .errors import InvalidArgumentError

logger = logging.getLogger(__name__)

DEFAULT_LIST_SIZE = 10000

FISHER_YATES = "fisher_yates"
DRAW_AND_REMOVE = "draw_and_remove"
SUPPORTED_ALGORITHMS = [FISHER_YATES, DRAW_AND_REMOVE]


@dataclass
class GenerationResult:
    """Outcome of :func:`try_generate`: either the values or the error."""
    values: Optional[List[int]] = None
    error: Optional[InvalidArgumentError] = None

    @property
    def success(self) -> bool:
        return self.error is None


def _validate_size(n) -> int:
    # bool is an int subclass but never a meaningful size
    if isinstance(n, bool) or not isinstance(n, int):
        raise InvalidArgumentError(f"List size must be an integer, got {type(n).__name__}")
    if n < 0:
        raise InvalidArgumentError(f"List size must be non-negative, got {n}")
    return n


def _fisher_yates(n: int, rng: random.Random) -> List[int]:
    values = list(range(1, n + 1))
    for i in range(n - 1, 0, -1):
        j = rng.randint(0, i)
        values[i], values[j] = values[j], values[i]
    return values


def _draw_and_remove(n: int, rng: random.Random) -> List[int]:
    pool = list(range(1, n + 1))
    scrambled = []

    while pool:
        if len(pool) > 1:
            index = rng.randrange(len(pool))
            scrambled.append(pool.pop(index))
        else:
            # Last value left, nothing to choose between
            scrambled.append(pool.pop())

    return scrambled


_ALGORITHMS = {
    FISHER_YATES: _fisher_yates,
    DRAW_AND_REMOVE: _draw_and_remove,
}


def generate(n: int = DEFAULT_LIST_SIZE,
             rng: Optional[random.Random] = None,
             algorithm: str = FISHER_YATES) -> List[int]:
    """
    Generate the integers 1..n in a uniformly random order.

    Args:
        n: Number of values to generate (default: 10000). Zero yields an
           empty list.
        rng: Random source providing ``randint`` and ``randrange``. A fresh
             ``random.Random`` is used when omitted.
        algorithm: One of ``SUPPORTED_ALGORITHMS``.

    Returns:
        List[int]: A permutation of 1..n

    Raises:
        InvalidArgumentError: If n is negative or not an integer, or the
            algorithm name is unknown
    """
    n = _validate_size(n)

    if algorithm not in _ALGORITHMS:
        raise InvalidArgumentError(
            f"Unknown shuffle algorithm '{algorithm}'. "
            f"Available algorithms: {SUPPORTED_ALGORITHMS}"
        )

    if rng is None:
        rng = random.Random()

    values = _ALGORITHMS[algorithm](n, rng)
    logger.debug(f"Generated {len(values)} values using {algorithm}")
    return values


def try_generate(n: int = DEFAULT_LIST_SIZE,
                 rng: Optional[random.Random] = None,
                 algorithm: str = FISHER_YATES) -> GenerationResult:
    """Like :func:`generate`, but returns invalid arguments as a result instead of raising."""
    try:
        return GenerationResult(values=generate(n, rng=rng, algorithm=algorithm))
    except InvalidArgumentError as e:
        logger.debug(f"Generation rejected: {e}")
        return GenerationResult(error=e)
