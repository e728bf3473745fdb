"""
snowflakeid.default - Process-wide default generator.

Builds one SnowflakeGenerator lazily from environment configuration
(see snowflakeid.env) for callers that just want IDs without wiring a
generator themselves.
"""

import threading
from typing import Optional

from . import env
from .snowflake import SnowflakeGenerator

_generator: Optional[SnowflakeGenerator] = None
_generator_lock = threading.Lock()


def get_generator() -> SnowflakeGenerator:
    """
    Get the default generator, building it on first use.

    Returns:
        SnowflakeGenerator: Generator configured from SNOWFLAKE_EPOCH and SNOWFLAKE_MACHINE_ID

    Raises:
        ConfigurationError: If the environment holds invalid values
    """
    global _generator
    with _generator_lock:
        if _generator is None:
            _generator = SnowflakeGenerator(env.get_epoch(), env.get_machine_id())
        return _generator


def reset_generator() -> None:
    """Drop the default generator so the next call re-reads configuration."""
    global _generator
    with _generator_lock:
        _generator = None


def get_snowflake_id() -> int:
    """
    Get a single Snowflake ID.

    Returns:
        int: Unique 64-bit Snowflake ID
    """
    return get_generator().generate_id()


def get_snowflake_ids(size: int) -> list[int]:
    """
    Get a bulk of Snowflake IDs.

    For sizes larger than MAX_SEQUENCE (4095), automatically splits the request
    into multiple sequential bulk generations. This allows generating any number
    of IDs while maintaining uniqueness and time-ordering.

    Args:
        size: Number of IDs to generate (must be >= 0)

    Returns:
        list[int]: List of unique 64-bit Snowflake IDs in ascending order

    Raises:
        ValueError: If size is negative

    Examples:
        >>> ids = get_snowflake_ids(10000)  # Generates 10k IDs across multiple chunks
        >>> len(ids)
        10000
        >>> ids == sorted(ids)  # Always time-ordered
        True
    """
    return get_generator().get(size)
