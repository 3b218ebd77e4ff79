"""
Command-line interface for the Marble standings simulator.
"""

import click
import logging
from dataclasses import replace

from .config import (
    SimulationConfig, SCORING_PRESETS, BACKENDS,
    load_simulation_config_from_json, load_scoring_from_json, parse_scoring,
)
from .errors import ConfigurationError, DataError
from .pipeline import run_projection
from .report import format_summary


@click.command()
@click.option(
    '--standings-file', '-f',
    type=click.Path(exists=True, dir_okay=False),
    default='standings.txt',
    show_default=True,
    help='File to load current standings from'
)
@click.option(
    '--remains', '-r',
    type=int,
    default=None,
    help='Number of remaining events (default: 1)'
)
@click.option(
    '--threads', '-t',
    type=int,
    default=None,
    help='Number of parallel workers for the simulation (default: 4)'
)
@click.option(
    '--iterations', '-i',
    type=int,
    default=None,
    help='Number of seasons to simulate (default: 1000000)'
)
@click.option(
    '--out-dir', '-o',
    type=click.Path(file_okay=False),
    default='./',
    show_default=True,
    help='Directory for the CSV and JSON results'
)
@click.option(
    '--seed',
    type=int,
    default=None,
    help='Random seed for reproducibility'
)
@click.option(
    '--scoring',
    type=str,
    default=None,
    help='Comma separated points per finish position, e.g. "25,20,15,0"'
)
@click.option(
    '--scoring-file',
    type=click.Path(exists=True, dir_okay=False),
    help='Scoring table JSON file'
)
@click.option(
    '--scoring-preset',
    type=click.Choice(list(SCORING_PRESETS.keys())),
    default=None,
    help='Named scoring table (default: default)'
)
@click.option(
    '--config', 'config_path',
    type=click.Path(exists=True, dir_okay=False),
    help='Simulation config JSON; command-line options override it'
)
@click.option(
    '--backend',
    type=click.Choice(list(BACKENDS)),
    default=None,
    help='Worker backend: thread (default) or process'
)
@click.option(
    '--verbose/--quiet', '-v/-q',
    default=True,
    help='Verbose output'
)
def main(
    standings_file,
    remains,
    threads,
    iterations,
    out_dir,
    seed,
    scoring,
    scoring_file,
    scoring_preset,
    config_path,
    backend,
    verbose
):
    """
    Estimate final-rank probabilities from current standings.
    """
    if verbose:
        logging.basicConfig(
            level=logging.INFO,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    if scoring and scoring_file:
        raise click.BadParameter(
            "use either --scoring or --scoring-file, not both", param_hint="'--scoring'"
        )

    try:
        config = _build_config(
            config_path, remains, threads, iterations, seed,
            scoring, scoring_file, scoring_preset, backend
        )
        click.echo("Running simulation...")
        click.echo(f"  Standings: {standings_file}")
        click.echo(f"  Remaining events: {config.remaining_events}")
        click.echo(f"  Iterations: {config.iterations}")
        click.echo(f"  Workers: {config.workers} ({config.backend})")
        if config.seed is not None:
            click.echo(f"  Seed: {config.seed}")

        results = run_projection(standings_file, config, out_dir=out_dir)
    except (ConfigurationError, DataError) as e:
        raise click.ClickException(str(e)) from e

    click.echo("")
    for line in results['lines']:
        click.echo(line)

    if verbose:
        click.echo("")
        click.echo(format_summary(results['table'].names, results['result']))

    for name in results['clinched']:
        click.echo(f"\n{name} has clinched first place")

    click.echo(f"\nProbabilities exported to {results['outputs']['csv']}")
    click.echo(f"Summary saved to {results['outputs']['json']}")


def _build_config(
    config_path,
    remains,
    threads,
    iterations,
    seed,
    scoring,
    scoring_file,
    scoring_preset,
    backend
) -> SimulationConfig:
    """Config file (or defaults) with any command-line overrides applied."""
    config = load_simulation_config_from_json(config_path) if config_path else SimulationConfig()

    overrides = {}
    if remains is not None:
        overrides['remaining_events'] = remains
    if threads is not None:
        overrides['workers'] = threads
    if iterations is not None:
        overrides['iterations'] = iterations
    if seed is not None:
        overrides['seed'] = seed
    if backend is not None:
        overrides['backend'] = backend
    if scoring_preset is not None:
        overrides['scoring_preset'] = scoring_preset
        overrides['scoring'] = None
    if scoring:
        overrides['scoring'] = list(parse_scoring(scoring))
    elif scoring_file:
        overrides['scoring'] = list(load_scoring_from_json(scoring_file))

    # replace() re-runs __post_init__ validation
    return replace(config, **overrides)


if __name__ == '__main__':
    main()
