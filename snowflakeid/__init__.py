"""
snowflakeid - Thread-safe 64-bit Snowflake ID generation.

Each generator packs a millisecond timestamp, a machine ID and a
per-millisecond sequence into one non-negative 64-bit integer.
"""

__version__ = "0.1.0"

from .exceptions import ClockRegressionError, ConfigurationError, SnowflakeError

from .snowflake import (
    MACHINE_ID_BIT,
    MACHINE_ID_SHIFT,
    MAX_MACHINE_ID,
    MAX_SEQUENCE,
    MAX_TIMESTAMP,
    SEQUENCE_BIT,
    SIGN_BIT,
    TIMESTAMP_BIT,
    TIMESTAMP_SHIFT,
    SnowflakeGenerator,
    decode_snowflake_id,
    new_generator,
)

from .default import (
    get_generator,
    get_snowflake_id,
    get_snowflake_ids,
    reset_generator,
)
