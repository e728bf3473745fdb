"""
snowflakeid.exceptions - Errors raised by the Snowflake ID generator.

Both concrete errors are fatal: the generator never retries and callers
are expected to treat them as operator or programmer bugs.
"""


class SnowflakeError(Exception):
    """Base class for all snowflakeid errors."""


class ConfigurationError(SnowflakeError, ValueError):
    """Raised when a generator is built with an invalid machine ID or config value."""


class ClockRegressionError(SnowflakeError, RuntimeError):
    """
    Raised when the wall clock reads earlier than the last issued timestamp.

    Attributes:
        last_timestamp: Last issued timestamp (ms since epoch)
        current_timestamp: Timestamp just read from the clock (ms since epoch)
    """

    def __init__(self, last_timestamp: int, current_timestamp: int):
        self.last_timestamp = last_timestamp
        self.current_timestamp = current_timestamp
        super().__init__(
            f"Clock moved backwards. Refusing to generate ID for "
            f"{last_timestamp - current_timestamp}ms"
        )
