from typing import Optional


class MemoryMatchError(Exception):
    """Base exception for memorymatch errors."""

    def __init__(
        self, message: str, original_exception: Optional[Exception] = None
    ):
        super().__init__(message)
        self.original_exception = original_exception


class ConfigurationError(MemoryMatchError):
    """Raised when a game is configured with unusable parameters."""

    pass


class UnknownDifficultyError(ConfigurationError, ValueError):
    """Raised when a difficulty label has no pair count."""

    pass


class InvalidPairCountError(ConfigurationError, ValueError):
    """Raised when a deck is requested with a non-positive pair count."""

    pass


class IllegalTransitionError(MemoryMatchError):
    """Indicates a card was moved along a transition its face does not
    allow (e.g. hiding a matched card)."""

    pass
