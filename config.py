from dataclasses import dataclass
from constants import ADDRESS_LENGTH, MAX_CACHE_LINES
import logging

LOGGER = logging.getLogger("csim")


class ConfigurationError(Exception):
    """Raised when the cache geometry or trace source is unusable."""


@dataclass
class CacheConfig:
    """
    Geometry of the simulated cache plus the trace to replay.
    s: number of set index bits (S = 2^s sets)
    E: associativity (lines per set)
    b: number of block offset bits (B = 2^b bytes per block)
    """
    s: int
    E: int
    b: int
    trace_file: str = None
    verbose: bool = False

    @property
    def set_count(self) -> int:
        return 1 << self.s

    @property
    def block_size(self) -> int:
        return 1 << self.b

    @property
    def cache_size(self) -> int:
        return self.set_count * self.E * self.block_size

    def validate(self, require_trace: bool = True):
        for name in ("s", "E", "b"):
            value = getattr(self, name)
            if value is None:
                raise ConfigurationError(f"Missing required parameter -{name}")
            if not isinstance(value, int) or isinstance(value, bool):
                raise ConfigurationError(f"Parameter -{name} must be an integer, got {value!r}")
        if self.s < 0:
            raise ConfigurationError(f"Number of set index bits must be non-negative, got {self.s}")
        if self.b < 0:
            raise ConfigurationError(f"Number of block offset bits must be non-negative, got {self.b}")
        if self.E < 1:
            raise ConfigurationError(f"Associativity must be at least 1, got {self.E}")
        if self.s + self.b > ADDRESS_LENGTH:
            raise ConfigurationError(
                f"s + b must not exceed the {ADDRESS_LENGTH}-bit address width, got {self.s + self.b}"
            )
        if self.set_count * self.E > MAX_CACHE_LINES:
            raise ConfigurationError(
                f"Cache of {self.set_count} sets x {self.E} lines exceeds the {MAX_CACHE_LINES} line limit"
            )
        if require_trace and not self.trace_file:
            raise ConfigurationError("Missing required trace file")
        LOGGER.debug(f"Validated configuration: {self}")
        return self

    def __str__(self):
        return f"S={self.set_count} E={self.E} B={self.block_size} ({self.cache_size} bytes), trace={self.trace_file}"
