import contextlib
import io
import unittest
from cache import Cache
from config import CacheConfig
from constants import FIRST_TICK
from core import AccessOutcome, AccessResult, Core, Statistics
from instruction import Instruction, InstructionType


def same_set_addrs(count, s=1, b=1, set_index=0):
    # distinct tags 0..count-1 in one set
    return [(tag << (s + b)) | (set_index << b) for tag in range(count)]


class TestCore(unittest.TestCase):

    def setUp(self):
        self.core = Core(Cache(s=1, associativity=2, b=1))

    def test_miss_then_hit(self):
        result = self.core.access(0x10)
        self.assertEqual(result, AccessResult(AccessOutcome.MISS, evicted=False))
        result = self.core.access(0x11) # same block
        self.assertEqual(result, AccessResult(AccessOutcome.HIT))
        self.assertEqual(self.core.stats.as_tuple(), (1, 1, 0))

    def test_tick_advances_on_every_access(self):
        self.assertEqual(self.core.tick, FIRST_TICK)
        self.core.access(0)
        self.core.access(0)
        self.core.execute(Instruction(InstructionType.MODIFY, 4, 1))
        self.assertEqual(self.core.tick, FIRST_TICK + 4)
        # the hit restamped the line with the tick of that access
        line_ind = self.core.cache.lookup(0, 1)
        self.assertEqual(self.core.cache.get_line(0, line_ind).recency, FIRST_TICK + 3)

    def test_instruction_fetch_is_ignored(self):
        results = self.core.execute(Instruction(InstructionType.INSTRUCTION, 0x400, 4))
        self.assertEqual(results, [])
        self.assertEqual(self.core.stats, Statistics())
        self.assertEqual(self.core.tick, FIRST_TICK)
        self.assertFalse(any(line.valid for line in self.core.cache.lines))

    def test_load_and_store_access_once(self):
        for instr_type in (InstructionType.LOAD, InstructionType.STORE):
            core = Core(Cache(s=1, associativity=1, b=1))
            results = core.execute(Instruction(instr_type, 0x20, 1))
            self.assertEqual(len(results), 1)
            self.assertEqual(core.stats.as_tuple(), (0, 1, 0))

    def test_modify_of_absent_address(self):
        results = self.core.execute(Instruction(InstructionType.MODIFY, 0x20, 1))
        self.assertEqual([r.outcome for r in results], [AccessOutcome.MISS, AccessOutcome.HIT])
        self.assertEqual(self.core.stats.as_tuple(), (1, 1, 0))

    def test_modify_of_present_address(self):
        self.core.access(0x20)
        results = self.core.execute(Instruction(InstructionType.MODIFY, 0x20, 1))
        self.assertEqual([r.outcome for r in results], [AccessOutcome.HIT, AccessOutcome.HIT])
        self.assertEqual(self.core.stats.as_tuple(), (2, 1, 0))

    def test_modify_with_eviction(self):
        core = Core(Cache(s=1, associativity=1, b=1))
        a, b = same_set_addrs(2)
        core.access(a)
        results = core.execute(Instruction(InstructionType.MODIFY, b, 1))
        self.assertEqual(results, [AccessResult(AccessOutcome.MISS, evicted=True), AccessResult(AccessOutcome.HIT)])
        self.assertEqual(core.stats.as_tuple(), (1, 2, 1))

    def test_working_set_that_fits_only_hits(self):
        core = Core(Cache(s=1, associativity=4, b=1))
        addrs = same_set_addrs(3)
        for addr in addrs:
            core.access(addr)
        self.assertEqual(core.stats.as_tuple(), (0, 3, 0))

        for addr in [addrs[2], addrs[0], addrs[1], addrs[1], addrs[2], addrs[0]]:
            self.assertEqual(core.access(addr).outcome, AccessOutcome.HIT)
        self.assertEqual(core.stats.as_tuple(), (6, 3, 0))

    def test_one_tag_too_many_evicts_oldest(self):
        E = 4
        core = Core(Cache(s=1, associativity=E, b=1))
        addrs = same_set_addrs(E + 1)
        for addr in addrs:
            core.access(addr)
        self.assertEqual(core.stats.as_tuple(), (0, E + 1, 1))
        tags = {line.tag for line in core.cache.get_set(0)}
        self.assertEqual(tags, set(range(1, E + 1)))
        self.assertFalse(core.cache.is_in_cache(addrs[0]))

    def test_hit_refreshes_recency(self):
        a, b, c = same_set_addrs(3)
        self.core.access(a)
        self.core.access(b)
        self.core.access(a) # b is now LRU
        self.assertTrue(self.core.access(c).evicted)
        self.assertTrue(self.core.cache.is_in_cache(a))
        self.assertFalse(self.core.cache.is_in_cache(b))

    def test_direct_mapped_conflict(self):
        core = Core.from_config(CacheConfig(s=1, E=1, b=1))
        for addr in (0, 8, 0):
            core.access(addr)
        self.assertEqual(core.stats.as_tuple(), (0, 3, 2))

    def test_verbose_output(self):
        core = Core(Cache(s=1, associativity=1, b=1), verbose=True)
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            core.execute(Instruction(InstructionType.LOAD, 0x10, 1))
            core.execute(Instruction(InstructionType.MODIFY, 0x20, 4))
            core.execute(Instruction(InstructionType.INSTRUCTION, 0x400, 4))
        self.assertEqual(out.getvalue(), "L 10,1 miss\nM 20,4 miss eviction hit\n")

    def test_quiet_by_default(self):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            self.core.execute(Instruction(InstructionType.LOAD, 0x10, 1))
        self.assertEqual(out.getvalue(), "")

if __name__ == "__main__":
    unittest.main()
