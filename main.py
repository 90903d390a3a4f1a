#!/usr/bin/env python3
"""
Number List Scrambler - Main Entry Point

Generates the numbers 1..N in random order, reports whether the list
passes the duplicate, size and sum checks, and optionally prints it.
"""

import argparse
import logging
import sys
from typing import List, Optional, Tuple

from tqdm import tqdm

from number_scrambler.core.display import format_list
from number_scrambler.core.errors import InvalidArgumentError
from number_scrambler.core.shuffler import SUPPORTED_ALGORITHMS, generate
from number_scrambler.core.verifier import VerificationResult, verify_permutation
from number_scrambler.utils.config import (
    LOG_LEVELS,
    ConfigurationError,
    ConfigurationFactory,
    ConfigurationManager,
    set_config,
)

logger = logging.getLogger(__name__)

PROMPT = "Do you want to see the list (y/n):"


class NumberListScrambler:
    """
    Runs generation and verification using settings from a ConfigurationManager.
    """

    def __init__(self, config: ConfigurationManager, size: Optional[int] = None,
                 algorithm: Optional[str] = None):
        """
        Args:
            config: Loaded configuration
            size: Overrides generation.size when given
            algorithm: Overrides generation.algorithm when given
        """
        self.config = config
        self.size = size if size is not None else config.get('generation.size')
        self.algorithm = algorithm or config.get('generation.algorithm')
        self.per_row = config.get('display.per_row')
        self.width = config.get('display.width')

    def run_once(self) -> Tuple[List[int], VerificationResult]:
        """Generate one list and verify it."""
        values = generate(self.size, algorithm=self.algorithm)
        return values, verify_permutation(values, self.size)

    def run_batch(self, runs: int) -> int:
        """
        Generate and verify the list repeatedly.

        Returns:
            int: Number of runs where every check passed
        """
        passed = 0
        progress_bar = tqdm(range(runs), desc=f"Scrambling {self.size} numbers")

        for i in progress_bar:
            _, result = self.run_once()
            if result.all_passed:
                passed += 1
            else:
                logger.warning(f"Run {i + 1} failed verification: {result.to_dict()}")

            progress_bar.set_postfix({
                'passed': f"{passed}/{i + 1}",
            })

        return passed

    def report(self, values: Optional[List[int]], result: VerificationResult) -> List[str]:
        """Human readable lines describing a verification result."""
        return [
            "A list of items has been generated" if values is not None else "No list has been generated",
            "The generated list contains {}".format(
                "no duplicates" if result.no_duplicates else "duplicates"),
            "The generated list has {}".format(
                f"exactly {self.size:,} items" if result.correct_size else "an invalid number of items"),
            "The numbers in the generated list are {}".format(
                "valid" if result.correct_sum else "invalid"),
        ]

    def render(self, values: List[int]) -> str:
        return format_list(values, per_row=self.per_row, width=self.width)


def _setup_logging(level: str, fmt: str):
    """Set up logging for the console run."""
    logging.basicConfig(level=getattr(logging, level), format=fmt)


def _ask_to_show() -> bool:
    try:
        entry = input(PROMPT)
    except EOFError:
        return False
    return entry.strip().lower() == "y"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="number-scrambler",
        description="Generate the numbers 1..N in random order and verify the result",
    )
    parser.add_argument("--size", type=int, default=None,
                        help="How many numbers to generate (default: generation.size, 10000)")
    parser.add_argument("--algorithm", choices=SUPPORTED_ALGORITHMS, default=None,
                        help="Shuffle algorithm (default: generation.algorithm)")
    parser.add_argument("--config", default=None,
                        help="Path to a YAML configuration file")
    parser.add_argument("--runs", type=int, default=None,
                        help="Repeat generation and verification N times and report a summary")
    parser.add_argument("--log-level", choices=LOG_LEVELS, default=None,
                        help="Logging level (default: logging.level)")

    show = parser.add_mutually_exclusive_group()
    show.add_argument("--show", dest="show", action="store_true", default=None,
                      help="Print the list without asking")
    show.add_argument("--no-show", dest="show", action="store_false",
                      help="Never print the list")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Usage: python main.py [--size N] [--algorithm NAME] [--config PATH]
                          [--runs K] [--show | --no-show] [--log-level LEVEL]

    Returns:
        int: Process exit status. 0 when every check passed, 1 when a check
             failed or an unexpected error occurred, 2 for invalid input.
    """
    args = build_parser().parse_args(argv)

    try:
        config = ConfigurationFactory.create_default(args.config)
        set_config(config)

        _setup_logging(args.log_level or config.get('logging.level'),
                       config.get('logging.format'))

        scrambler = NumberListScrambler(config, size=args.size, algorithm=args.algorithm)

        if args.runs is not None:
            if args.runs <= 0:
                raise InvalidArgumentError(f"--runs must be positive, got {args.runs}")

            passed = scrambler.run_batch(args.runs)
            print(f"\nScrambling Complete!")
            print("=" * 50)
            print(f"List size: {scrambler.size:,}")
            print(f"Algorithm: {scrambler.algorithm}")
            print(f"Total runs: {args.runs}")
            print(f"Passed: {passed}")
            print(f"Failed: {args.runs - passed}")
            return 0 if passed == args.runs else 1

        values, result = scrambler.run_once()
        for line in scrambler.report(values, result):
            print(line)

        show = args.show if args.show is not None else _ask_to_show()
        if show and values:
            print(scrambler.render(values))

        return 0 if result.all_passed else 1

    except (InvalidArgumentError, ConfigurationError) as e:
        print(f"Error: {e}")
        return 2
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 1
    except Exception as e:
        logger.exception("Unexpected failure")
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
