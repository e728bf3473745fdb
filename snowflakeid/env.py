"""
snowflakeid.env - Environment variable configuration.

This module centralizes all environment variable reading with sensible defaults.
Values are parsed on demand so a changed environment is picked up by the next
default generator that gets built.
"""

import os
from datetime import datetime, timezone

from dotenv import load_dotenv

from .exceptions import ConfigurationError
from .snowflake import MAX_MACHINE_ID

load_dotenv()

# Custom epoch: January 1, 2024 00:00:00 UTC
# This gives us ~69 years from this epoch (41 bits of milliseconds)
DEFAULT_EPOCH = "2024-01-01T00:00:00+00:00"
DEFAULT_MACHINE_ID = "0"


def get_machine_id() -> int:
    """
    Read the default generator's machine ID from SNOWFLAKE_MACHINE_ID.

    Returns:
        int: Machine ID (0-1023)

    Raises:
        ConfigurationError: If the value is not an integer or is out of range
    """
    raw = os.getenv("SNOWFLAKE_MACHINE_ID", DEFAULT_MACHINE_ID)
    try:
        machine_id = int(raw)
    except ValueError as e:
        raise ConfigurationError(f"SNOWFLAKE_MACHINE_ID must be an integer, got {raw!r}") from e

    if not 0 <= machine_id <= MAX_MACHINE_ID:
        raise ConfigurationError(
            f"SNOWFLAKE_MACHINE_ID must be between 0 and {MAX_MACHINE_ID}, got {machine_id}"
        )
    return machine_id


def get_epoch() -> datetime:
    """
    Read the default generator's epoch from SNOWFLAKE_EPOCH (ISO-8601).

    A value without an offset is taken as UTC.

    Returns:
        datetime: Timezone-aware epoch

    Raises:
        ConfigurationError: If the value is not a valid ISO-8601 datetime
    """
    raw = os.getenv("SNOWFLAKE_EPOCH", DEFAULT_EPOCH)
    try:
        epoch = datetime.fromisoformat(raw)
    except ValueError as e:
        raise ConfigurationError(f"SNOWFLAKE_EPOCH must be an ISO-8601 datetime, got {raw!r}") from e

    if epoch.tzinfo is None:
        epoch = epoch.replace(tzinfo=timezone.utc)
    return epoch
