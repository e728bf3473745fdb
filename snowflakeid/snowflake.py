"""
snowflakeid.snowflake - Snowflake ID generator.

Snowflake ID format (64 bits) - based on Twitter's Snowflake algorithm:
Reference: https://en.wikipedia.org/wiki/Snowflake_ID

Bit layout (from MSB to LSB):
- Bit 63: Sign bit (always 0 for positive integers)
- Bits 62-22: Timestamp in milliseconds since the chosen epoch (41 bits)
- Bits 21-12: Machine/worker ID (10 bits, supports up to 1024 machines)
- Bits 11-0: Sequence number (12 bits, up to 4096 IDs per millisecond per machine)

This provides:
- ~69 years of timestamps from the epoch
- 1024 unique machine IDs (0-1023)
- 4096 IDs per millisecond per machine
- Time-ordered identifiers, unique as long as every generator sharing an
  epoch has its own machine ID
"""

import logging
import threading
import time
from datetime import datetime, timedelta, timezone

from .exceptions import ClockRegressionError, ConfigurationError

logger = logging.getLogger(__name__)

# Bit allocation (Wikipedia Snowflake ID standard)
SIGN_BIT = 1
TIMESTAMP_BIT = 41
MACHINE_ID_BIT = 10  # Bits 21-12: supports 1024 machines
SEQUENCE_BIT = 12    # Bits 11-0: supports 4096 IDs per millisecond

# Maximum values
MAX_TIMESTAMP = (1 << TIMESTAMP_BIT) - 1
MAX_MACHINE_ID = (1 << MACHINE_ID_BIT) - 1  # 1023
MAX_SEQUENCE = (1 << SEQUENCE_BIT) - 1      # 4095

# Bit shifts for constructing the 64-bit ID
TIMESTAMP_SHIFT = MACHINE_ID_BIT + SEQUENCE_BIT  # 22 (bits 62-22 for timestamp)
MACHINE_ID_SHIFT = SEQUENCE_BIT                  # 12 (bits 21-12 for machine ID)

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_NS_PER_MS = 1_000_000


def _epoch_ns(chosen_epoch: datetime) -> int:
    """Convert an epoch datetime to integer nanoseconds since the Unix epoch."""
    if chosen_epoch.tzinfo is None:
        chosen_epoch = chosen_epoch.replace(tzinfo=timezone.utc)
    return (chosen_epoch - _UNIX_EPOCH) // timedelta(microseconds=1) * 1000


class SnowflakeGenerator:
    """
    Thread-safe Snowflake ID generator.

    One lock guards ``current_sequence_number`` and
    ``last_generated_timestamp``; any number of threads may share an instance.
    """

    def __init__(self, chosen_epoch: datetime, machine_id: int):
        """
        Initialize the Snowflake ID generator.

        Args:
            chosen_epoch: Instant timestamps are measured from. Naive
                datetimes are taken as UTC. Must not lie in the future when
                the first ID is generated.
            machine_id: Unique machine/worker ID (0-1023)

        Raises:
            ConfigurationError: If machine_id is out of valid range
        """
        if not 0 <= machine_id <= MAX_MACHINE_ID:
            logger.error("Rejecting machine ID %s (valid range 0-%s)", machine_id, MAX_MACHINE_ID)
            raise ConfigurationError(
                f"Machine ID must be between 0 and {MAX_MACHINE_ID}, got {machine_id}"
            )

        self.chosen_epoch = chosen_epoch
        self.machine_id = machine_id
        self.current_sequence_number = 0
        self.last_generated_timestamp = 0
        self.lock = threading.Lock()
        self._epoch_ns = _epoch_ns(chosen_epoch)

        logger.debug(
            "Created Snowflake generator machine_id=%s epoch=%s",
            machine_id,
            chosen_epoch,
        )

    def timestamp(self) -> int:
        """Get current time in milliseconds since the chosen epoch, truncated toward zero."""
        elapsed_ns = time.time_ns() - self._epoch_ns
        if elapsed_ns < 0:
            return -(-elapsed_ns // _NS_PER_MS)
        return elapsed_ns // _NS_PER_MS

    def _wait_next_millis(self) -> int:
        """Spin until the clock reads a millisecond other than the last issued one."""
        while True:
            timestamp = self.timestamp()
            if timestamp != self.last_generated_timestamp:
                return timestamp

    def _next_sequence(self) -> tuple[int, int]:
        """
        Advance the sequence/timestamp pair. Caller must hold ``self.lock``.

        Returns:
            tuple: (sequence, timestamp) to pack into the next ID

        Raises:
            ClockRegressionError: If clock moves backwards
        """
        timestamp = self.timestamp()

        if timestamp < self.last_generated_timestamp:
            logger.error(
                "Clock moved backwards: last=%sms now=%sms machine_id=%s",
                self.last_generated_timestamp,
                timestamp,
                self.machine_id,
            )
            raise ClockRegressionError(self.last_generated_timestamp, timestamp)

        if timestamp > self.last_generated_timestamp:
            # New millisecond - reset sequence
            self.current_sequence_number = 0
        else:
            # Same millisecond - increment sequence
            self.current_sequence_number = (self.current_sequence_number + 1) & MAX_SEQUENCE
            # Sequence overflow - wait for next millisecond
            if self.current_sequence_number == 0:
                timestamp = self._wait_next_millis()
                logger.debug(
                    "Sequence exhausted at %sms, resumed at %sms",
                    self.last_generated_timestamp,
                    timestamp,
                )

        self.last_generated_timestamp = timestamp
        return self.current_sequence_number, timestamp

    def _pack(self, sequence: int, timestamp: int) -> int:
        """Combine all parts into final ID."""
        return (
            ((timestamp & MAX_TIMESTAMP) << TIMESTAMP_SHIFT)
            | ((self.machine_id & MAX_MACHINE_ID) << MACHINE_ID_SHIFT)
            | (sequence & MAX_SEQUENCE)
        )

    def generate_id(self) -> int:
        """
        Generate a new Snowflake ID.

        Returns:
            int: Unique 64-bit Snowflake ID

        Raises:
            ClockRegressionError: If clock moves backwards
        """
        with self.lock:
            sequence, timestamp = self._next_sequence()
        return self._pack(sequence, timestamp)

    def generate_bulk(self, count: int) -> list[int]:
        """
        Generate multiple sequential Snowflake IDs in a single lock acquisition.

        Args:
            count: Number of IDs to generate

        Returns:
            list[int]: List of unique 64-bit Snowflake IDs in ascending order

        Raises:
            ValueError: If count is less than 1
            ClockRegressionError: If clock moves backwards
        """
        if count < 1:
            raise ValueError(f"Count must be at least 1, got {count}")

        with self.lock:
            pairs = [self._next_sequence() for _ in range(count)]
        return [self._pack(sequence, timestamp) for sequence, timestamp in pairs]

    def get(self, size: int) -> list[int]:
        """
        Get a bulk of Snowflake IDs.

        Requests larger than MAX_SEQUENCE are split into chunks so the lock
        is released between them.

        Args:
            size: Number of IDs to generate (must be >= 0)

        Returns:
            list[int]: List of unique 64-bit Snowflake IDs in ascending order

        Raises:
            ValueError: If size is negative
        """
        if size < 0:
            raise ValueError(f"Size must be >= 0, got {size}")

        ids = []
        remaining = size
        while remaining > 0:
            chunk_size = min(remaining, MAX_SEQUENCE)
            ids.extend(self.generate_bulk(chunk_size))
            remaining -= chunk_size
        return ids

    def to_datetime(self, id_val: int) -> datetime:
        """Return the UTC instant encoded in an ID issued by this generator."""
        timestamp, _, _ = decode_snowflake_id(id_val)
        epoch = self.chosen_epoch
        if epoch.tzinfo is None:
            epoch = epoch.replace(tzinfo=timezone.utc)
        return (epoch + timedelta(milliseconds=timestamp)).astimezone(timezone.utc)


def new_generator(chosen_epoch: datetime, machine_id: int) -> SnowflakeGenerator:
    """
    Create a ready-to-use Snowflake ID generator.

    Args:
        chosen_epoch: Instant timestamps are measured from
        machine_id: Unique machine/worker ID (0-1023)

    Returns:
        SnowflakeGenerator: New generator with sequence and timestamp at 0

    Raises:
        ConfigurationError: If machine_id is out of valid range
    """
    return SnowflakeGenerator(chosen_epoch, machine_id)


def decode_snowflake_id(id_val: int) -> tuple[int, int, int]:
    """
    Decode a Snowflake ID into its component parts.

    Args:
        id_val: 64-bit Snowflake ID to decode

    Returns:
        tuple: (timestamp, machine_id, sequence)
            - timestamp: Milliseconds since epoch (bits 62-22)
            - machine_id: Machine/worker ID (bits 21-12)
            - sequence: Sequence number (bits 11-0)
    """
    timestamp = id_val >> TIMESTAMP_SHIFT
    machine_id = (id_val >> MACHINE_ID_SHIFT) & MAX_MACHINE_ID
    sequence = id_val & MAX_SEQUENCE
    return timestamp, machine_id, sequence
