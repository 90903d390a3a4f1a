"""
Exception types raised by the number scrambler.
"""


class NumberScramblerError(Exception):
    """Base class for all errors raised by this package."""
    pass


class InvalidArgumentError(NumberScramblerError, ValueError):
    """Raised when a list size or option is outside its accepted range."""
    pass
