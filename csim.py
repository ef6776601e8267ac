"""
csim - replays a Valgrind memory trace against a set-associative LRU cache and
reports the number of hits, misses and evictions.

Instruction loads (I) are ignored since only the data cache is modeled. A data
modify (M) is a load followed by a store to the same address, so it results
in two hits, or a miss and a hit plus a possible eviction. Each request is
assumed to touch a single cache block.

Example:
    csim -s 4 -E 1 -b 4 -t traces/yi.trace
    csim -v -s 8 -E 2 -b 4 -t traces/yi.trace
"""
import logging
import click
from config import CacheConfig, ConfigurationError
from constants import RESULTS_FILE
from core import Statistics
from simulation import Simulation

LOGGER = logging.getLogger("csim")


def print_summary(stats: Statistics, results_file: str = RESULTS_FILE):
    click.echo(str(stats))
    with open(results_file, "w") as f:
        f.write(f"{stats.hits} {stats.misses} {stats.evictions}\n")


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-v", "verbose", is_flag=True, help="Optional verbose flag.")
@click.option("-s", "s", type=int, help="Number of set index bits.")
@click.option("-E", "E", type=int, help="Number of lines per set.")
@click.option("-b", "b", type=int, help="Number of block offset bits.")
@click.option("-t", "trace_file", type=click.Path(exists=True, dir_okay=False), help="Trace file.")
@click.option("--results", "results_file", default=RESULTS_FILE, show_default=True,
              help="File the final counters are written to.")
@click.option("--debug", is_flag=True, help="Log every cache access.")
@click.pass_context
def main(ctx, verbose, s, E, b, trace_file, results_file, debug):
    """Cache simulator replaying Valgrind traces with LRU replacement."""
    logging.basicConfig(level=logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING)

    if s is None or E is None or b is None or trace_file is None:
        click.echo(f"{ctx.info_name}: Missing required command line argument")
        click.echo(ctx.get_help())
        ctx.exit(1)

    config = CacheConfig(s, E, b, trace_file, verbose)
    try:
        config.validate()
    except ConfigurationError as e:
        click.echo(f"{ctx.info_name}: {e}", err=True)
        ctx.exit(1)

    LOGGER.info(f"Command arguments: s - {s}, E - {E}, b - {b}, trace file - {trace_file}")
    simulation = Simulation(config)
    stats = simulation.simulate()
    print_summary(stats, results_file)


if __name__ == "__main__":
    main()
