from dataclasses import dataclass, field
from typing import Iterable
from config import CacheConfig
from core import Core, Statistics
from instruction import parse_line
import logging

LOGGER = logging.getLogger("csim")


@dataclass
class Simulation:
    config: CacheConfig
    core: Core = field(init=False)
    records: int = 0
    skipped: int = 0

    def __post_init__(self):
        self.config.validate(require_trace=False)
        self.core = Core.from_config(self.config)

    @property
    def stats(self) -> Statistics:
        return self.core.stats

    def replay(self, lines: Iterable[str]) -> Statistics:
        """
        Feed trace records to the core in order. Lines that do not parse and
        unknown operations are skipped without touching the cache.
        """
        for line in lines:
            instr = parse_line(line)
            if instr is None:
                self.skipped += 1
                continue
            self.records += 1
            self.core.execute(instr)
        return self.stats

    def simulate(self) -> Statistics:
        self.config.validate()
        LOGGER.info(f"Replaying trace with {self.config}")
        with open(self.config.trace_file) as f:
            self.replay(f)
        LOGGER.info(f"Replayed {self.records} records ({self.skipped} skipped): {self.stats}")
        return self.stats
