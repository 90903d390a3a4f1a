"""
Number List Scrambler.

Generates the integers 1..N in random order and checks the result for
size, duplicates and sum.
"""

from .core import (
    DEFAULT_LIST_SIZE,
    InvalidArgumentError,
    NumberScramblerError,
    VerificationResult,
    generate,
    verify,
    verify_permutation,
)

__version__ = "0.1.0"

__all__ = [
    'DEFAULT_LIST_SIZE',
    'InvalidArgumentError',
    'NumberScramblerError',
    'VerificationResult',
    'generate',
    'verify',
    'verify_permutation',
]
