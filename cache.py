from dataclasses import dataclass
from typing import Optional
import logging

LOGGER = logging.getLogger("csim")


@dataclass
class MemAddressCacheInfo:
    tag: int
    set_index: int
    offset: int


def get_info_from_addr(mem_addr: int, s: int, b: int) -> MemAddressCacheInfo:
    """
    Split a memory address into tag, set index and block offset for a cache
    with 2^s sets and 2^b byte blocks.
    """
    offset = mem_addr & ((1 << b) - 1)
    set_index = (mem_addr >> b) & ((1 << s) - 1)
    tag = mem_addr >> (s + b)
    return MemAddressCacheInfo(tag, set_index, offset)


@dataclass
class CacheLine:
    valid: bool = False
    tag: int = 0
    recency: int = 0


@dataclass
class Cache:
    """
    Set-associative cache with LRU replacement.
    Only tags and recency are tracked, no data is stored.
    """
    s: int # Number of cache sets = 2^s
    associativity: int
    b: int # block size = 2^b bytes
    set_count: int
    lines: list[CacheLine]

    def __init__(self, s, associativity, b):
        self.s = s
        self.associativity = associativity
        self.b = b
        self.set_count = 1 << self.s
        # set i owns lines[i * E:(i + 1) * E]
        self.lines = [CacheLine() for _ in range(self.set_count * self.associativity)]

    def get_info_from_addr(self, mem_addr: int) -> MemAddressCacheInfo:
        return get_info_from_addr(mem_addr, self.s, self.b)

    def _slot(self, set_index: int, line_index: int) -> int:
        return set_index * self.associativity + line_index

    def get_line(self, set_index: int, line_index: int) -> CacheLine:
        return self.lines[self._slot(set_index, line_index)]

    def get_set(self, set_index: int) -> list[CacheLine]:
        start = self._slot(set_index, 0)
        return self.lines[start:start + self.associativity]

    def lookup(self, set_index: int, tag: int) -> Optional[int]:
        for i, line in enumerate(self.get_set(set_index)):
            if line.valid and line.tag == tag:
                return i
        return None

    def touch(self, set_index: int, line_index: int, tick: int):
        self.get_line(set_index, line_index).recency = tick

    def insert_or_evict(self, set_index: int, tag: int, tick: int) -> bool:
        """
        Place tag into the set. An invalid line is filled if there is one,
        otherwise the least recently used line is overwritten.
        Returns True if a valid line was evicted.
        """
        lines = self.get_set(set_index)
        for i, line in enumerate(lines):
            if not line.valid:
                line.valid = True
                line.tag = tag
                line.recency = tick
                self.log(f"Filled set {set_index} line {i} with tag {tag:#x}")
                return False

        victim_index = 0
        for i in range(1, len(lines)):
            # strict < keeps the lowest index on ties
            if lines[i].recency < lines[victim_index].recency:
                victim_index = i
        victim = lines[victim_index]
        self.log(f"Evicting tag {victim.tag:#x} from set {set_index} line {victim_index} for tag {tag:#x}")
        victim.tag = tag
        victim.recency = tick
        return True

    def is_in_cache(self, mem_addr: int) -> bool:
        addr_info: MemAddressCacheInfo = self.get_info_from_addr(mem_addr)
        return self.lookup(addr_info.set_index, addr_info.tag) is not None

    def log(self, message: str):
        LOGGER.debug("Cache: " + message)
