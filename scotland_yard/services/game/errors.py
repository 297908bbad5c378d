"""Error types raised by the game service.

The pure engine reports rule problems through ProcessResult error codes. The
controller turns a failed result into a ProtocolViolation carrying the same
code, so callers can tell caller mistakes apart from configuration problems.
"""


class ConfigurationError(ValueError):
    """The game could not be created from the supplied setup."""


class ProtocolViolation(Exception):
    """A caller broke the engine's interaction protocol.

    Raised before any state is mutated.
    """

    def __init__(self, error_code: str, message: str):
        super().__init__(f"{error_code}: {message}")
        self.error_code = error_code
        self.message = message


class InvariantViolation(AssertionError):
    """Internal game state became inconsistent. Never expected in a correct engine."""
