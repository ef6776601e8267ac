"""
Simulator constants.
Addresses in a Valgrind trace are 64-bit. The first access of a run is stamped
with tick 1 so that lines which were never filled (recency 0) are always older
than any line that was. Final counters are persisted for the autograder as
"<hits> <misses> <evictions>" in RESULTS_FILE.
"""
ADDRESS_LENGTH = 64
MAX_ADDRESS = (1 << ADDRESS_LENGTH) - 1

FIRST_TICK = 1

# lines are allocated up front, one object each
MAX_CACHE_LINES = 1 << 24

RESULTS_FILE = ".csim_results"
