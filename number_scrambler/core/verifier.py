"""
Permutation verification.

Three independent checks are applied to a list of integers: no value is
repeated, the list has the expected length, and the values add up to the
expected total. None of them is enough alone. A list where one value has
been swapped for an out-of-range number keeps its length and uniqueness,
and only the sum check catches it.
"""

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of the three permutation checks."""
    no_duplicates: bool
    correct_size: bool
    correct_sum: bool

    @property
    def all_passed(self) -> bool:
        return self.no_duplicates and self.correct_size and self.correct_sum

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary for serialization."""
        return {
            "no_duplicates": self.no_duplicates,
            "correct_size": self.correct_size,
            "correct_sum": self.correct_sum,
            "all_passed": self.all_passed,
        }


def expected_sum(n: int) -> int:
    """Sum of 1..n via the closed form n(n+1)/2."""
    return n * (n + 1) // 2


def find_duplicates(values: Sequence[int]) -> List[int]:
    """Return the values occurring more than once, in ascending order."""
    counts = Counter(values)
    return sorted(value for value, count in counts.items() if count > 1)


def has_no_duplicates(values: Sequence[int]) -> bool:
    """True if every value in the list occurs exactly once."""
    return not find_duplicates(values)


def has_exact_size(values: Sequence[int], expected_size: int) -> bool:
    """True if the list holds exactly expected_size values."""
    return len(values) == expected_size


def has_valid_sum(values: Sequence[int], expected_sum: int) -> bool:
    """True if the values add up to expected_sum."""
    return sum(values) == expected_sum


def verify(values: Sequence[int], expected_size: int, expected_sum: int) -> VerificationResult:
    """
    Run all three checks against a list.

    Args:
        values: The list to check. It is not modified.
        expected_size: Required number of values
        expected_sum: Required total of the values

    Returns:
        VerificationResult: One flag per check
    """
    duplicates = find_duplicates(values)
    result = VerificationResult(
        no_duplicates=not duplicates,
        correct_size=has_exact_size(values, expected_size),
        correct_sum=has_valid_sum(values, expected_sum),
    )

    if duplicates:
        logger.warning(f"Found {len(duplicates)} duplicated values, first: {duplicates[:5]}")
    if not result.correct_size:
        logger.warning(f"Expected {expected_size} values, got {len(values)}")
    if not result.correct_sum:
        logger.warning(f"Expected sum {expected_sum}, got {sum(values)}")

    logger.debug(f"Verification result: {result.to_dict()}")
    return result


def verify_permutation(values: Sequence[int], n: int) -> VerificationResult:
    """Check that values is a permutation of 1..n."""
    return verify(values, n, expected_sum(n))
