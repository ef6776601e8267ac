from cache import Cache, MemAddressCacheInfo
from config import CacheConfig
from constants import FIRST_TICK
from dataclasses import dataclass, field
from enum import Enum
from instruction import Instruction
import logging

LOGGER = logging.getLogger("csim")


class AccessOutcome(Enum):
    HIT = "hit"
    MISS = "miss"


@dataclass
class AccessResult:
    outcome: AccessOutcome
    evicted: bool = False

    def __str__(self):
        return self.outcome.value + (" eviction" if self.evicted else "")


@dataclass
class Statistics:
    hits: int = 0
    misses: int = 0
    evictions: int = 0

    def as_tuple(self) -> tuple[int, int, int]:
        return self.hits, self.misses, self.evictions

    def __str__(self):
        return f"hits:{self.hits} misses:{self.misses} evictions:{self.evictions}"


@dataclass
class Core:
    """
    Drives data accesses through the cache and keeps the run's counters.
    """
    cache: Cache
    verbose: bool = False
    stats: Statistics = field(default_factory=Statistics)
    tick: int = FIRST_TICK

    @classmethod
    def from_config(cls, config: CacheConfig) -> "Core":
        return cls(Cache(config.s, config.E, config.b), verbose=config.verbose)

    def access(self, address: int) -> AccessResult:
        addr_info: MemAddressCacheInfo = self.cache.get_info_from_addr(address)
        set_ind = addr_info.set_index
        tag = addr_info.tag

        line_ind = self.cache.lookup(set_ind, tag)
        if line_ind is not None:
            self.stats.hits += 1
            self.cache.touch(set_ind, line_ind, self.tick)
            result = AccessResult(AccessOutcome.HIT)
        else:
            self.stats.misses += 1
            evicted = self.cache.insert_or_evict(set_ind, tag, self.tick)
            if evicted:
                self.stats.evictions += 1
            result = AccessResult(AccessOutcome.MISS, evicted)

        self.log(f"tick {self.tick}: address {address:#x} -> set {set_ind}, tag {tag:#x}: {result}")
        self.tick += 1
        return result

    def execute(self, instr: Instruction) -> list[AccessResult]:
        # a modify is a load followed by a store to the same address
        results = [self.access(instr.address) for _ in range(instr.accesses())]
        if results and self.verbose:
            self.print(instr, results)
        return results

    def log(self, msg):
        LOGGER.debug(f"Core: {msg}")

    def print(self, instr: Instruction, results: list[AccessResult]):
        print(f"{instr} " + " ".join(str(r) for r in results))
