"""
Core generation and verification components.
"""

from .errors import NumberScramblerError, InvalidArgumentError
from .shuffler import (
    DEFAULT_LIST_SIZE,
    SUPPORTED_ALGORITHMS,
    GenerationResult,
    generate,
    try_generate,
)
from .verifier import (
    VerificationResult,
    expected_sum,
    find_duplicates,
    has_exact_size,
    has_no_duplicates,
    has_valid_sum,
    verify,
    verify_permutation,
)
from .display import format_list, format_rows

__all__ = [
    'NumberScramblerError',
    'InvalidArgumentError',
    'DEFAULT_LIST_SIZE',
    'SUPPORTED_ALGORITHMS',
    'GenerationResult',
    'generate',
    'try_generate',
    'VerificationResult',
    'expected_sum',
    'find_duplicates',
    'has_exact_size',
    'has_no_duplicates',
    'has_valid_sum',
    'verify',
    'verify_permutation',
    'format_list',
    'format_rows',
]
