"""Implements the command line interface."""

import io
import logging
from typing import Any, Dict, List, Optional, Tuple

import click
import yaml

from lhscan import __version__
from lhscan import configuration as lhscan_configuration
from lhscan import surface as lhscan_surface
from lhscan import tabulate as lhscan_tabulate
from lhscan import visualize as lhscan_visualize
from lhscan.exceptions import ZeroReferenceError


log = logging.getLogger(__name__)


class OrderedGroup(click.Group):
    """A group that shows commands in the order they were added."""

    def list_commands(self, _: Any) -> List[str]:
        """Returns a list of commands."""
        return list(self.commands.keys())


def _set_logging() -> None:
    """Sets log levels and format for CLI."""
    logging.basicConfig(
        level=logging.INFO, format="%(levelname)s - %(name)s - %(message)s"
    )
    logging.getLogger("matplotlib").setLevel(logging.WARNING)


def _load_config(config: io.TextIOWrapper) -> Dict[str, Any]:
    """Reads and validates a configuration from an open file."""
    lhscan_config = yaml.safe_load(config)
    lhscan_configuration.validate(lhscan_config)
    return lhscan_config


def _label(config: Dict[str, Any]) -> str:
    return config["General"].get("Name", "")


def _ratios(
    surface: lhscan_surface.LikelihoodSurface,
    reference: Optional[float],
    log_ratios: bool,
) -> lhscan_surface.RatioResults:
    """Returns likelihood ratios, switching to log ratios if the ratio is undefined."""
    if log_ratios:
        return surface.log_likelihood_ratios(reference)
    try:
        return surface.likelihood_ratios(reference)
    except ZeroReferenceError:
        log.warning("reference likelihood underflows, showing log-likelihood ratios")
        return surface.log_likelihood_ratios(reference)


@click.version_option(version=__version__)
@click.group(cls=OrderedGroup)
def lhscan() -> None:
    """Entrypoint to the lhscan CLI."""


@click.command()
@click.argument("config", type=click.File("r"))
@click.option(
    "--log_ratios", is_flag=True, help="tabulate log-likelihood ratios (default: False)"
)
@click.option(
    "--tablefolder",
    default="tables",
    help='folder to save tables to (default: "tables")',
)
@click.option(
    "--tablefmt",
    default="simple",
    help='format of the table (default: "simple")',
)
def evaluate(
    config: io.TextIOWrapper, log_ratios: bool, tablefolder: str, tablefmt: str
) -> None:
    """Evaluates the likelihood over the hypothesis grid and tabulates it.

    CONFIG: path to lhscan configuration file
    """
    _set_logging()
    lhscan_config = _load_config(config)
    surface = lhscan_configuration.build_surface(lhscan_config)
    likelihood_results = surface.results()
    ratio_results = _ratios(
        surface, lhscan_configuration.reference(lhscan_config), log_ratios
    )
    lhscan_tabulate.surface(
        likelihood_results,
        ratio_results=ratio_results,
        table_folder=tablefolder,
        table_label=_label(lhscan_config) or "surface",
        table_format=tablefmt,
    )


@click.command()
@click.argument("config", type=click.File("r"))
def mle(config: io.TextIOWrapper) -> None:
    """Finds the maximum-likelihood estimate on the hypothesis grid.

    Likelihood intervals are reported for the thresholds in the configuration.

    CONFIG: path to lhscan configuration file
    """
    _set_logging()
    lhscan_config = _load_config(config)
    surface = lhscan_configuration.build_surface(lhscan_config)
    mle_results = surface.max_likelihood_estimate()
    interval_results = [
        surface.likelihood_interval(threshold)
        for threshold in lhscan_configuration.thresholds(lhscan_config)
    ]
    lhscan_surface.print_results(mle_results, interval_results)


@click.command()
@click.argument("config", type=click.File("r"))
@click.argument("hypothesis", type=float)
@click.option(
    "--reference",
    default=None,
    type=float,
    help="reference hypothesis (default: from config, else maximum likelihood)",
)
def ratio(
    config: io.TextIOWrapper, hypothesis: float, reference: Optional[float]
) -> None:
    """Calculates the likelihood ratio of a hypothesis to a reference.

    CONFIG: path to lhscan configuration file

    HYPOTHESIS: hypothesis in the numerator of the ratio
    """
    _set_logging()
    lhscan_config = _load_config(config)
    surface = lhscan_configuration.build_surface(lhscan_config)
    if reference is None:
        reference = lhscan_configuration.reference(lhscan_config)
    try:
        likelihood_ratio = surface.likelihood_ratio(hypothesis, reference)
        log.info(f"likelihood ratio: {likelihood_ratio:.4g}")
    except ZeroReferenceError:
        log.warning("reference likelihood underflows, calculating log ratio")
        log_ratio = surface.log_likelihood_ratio(hypothesis, reference)
        log.info(f"log-likelihood ratio: {log_ratio:.4f}")


@click.command()
@click.argument("config", type=click.File("r"))
@click.option(
    "--threshold",
    "thresholds",
    type=str,
    multiple=True,
    help="likelihood ratio threshold or preset name, e.g. 1/8 or strong "
    "(default: from config)",
)
def interval(config: io.TextIOWrapper, thresholds: Tuple[str, ...]) -> None:
    """Determines likelihood intervals.

    CONFIG: path to lhscan configuration file
    """
    _set_logging()
    lhscan_config = _load_config(config)
    threshold_values = [
        lhscan_surface.resolve_threshold(threshold) for threshold in thresholds
    ] or lhscan_configuration.thresholds(lhscan_config)
    if not threshold_values:
        raise click.UsageError(
            "no thresholds given, use --threshold or Thresholds in the config"
        )
    surface = lhscan_configuration.build_surface(lhscan_config)
    interval_results = [
        surface.likelihood_interval(threshold) for threshold in threshold_values
    ]
    lhscan_surface.print_results(surface.max_likelihood_estimate(), interval_results)


@click.command()
@click.argument("config", type=click.File("r"))
@click.option(
    "--log_ratios", is_flag=True, help="show log-likelihood ratios (default: False)"
)
@click.option(
    "--figfolder",
    default="figures",
    help='folder to save figures to (default: "figures")',
)
def plot(config: io.TextIOWrapper, log_ratios: bool, figfolder: str) -> None:
    """Visualizes likelihood, log-likelihood and likelihood ratios.

    Ratios to the maximum-likelihood estimate are drawn with the likelihood interval
    thresholds, ratios to a configured Reference go into a separate figure.

    CONFIG: path to lhscan configuration file
    """
    _set_logging()
    lhscan_config = _load_config(config)
    surface = lhscan_configuration.build_surface(lhscan_config)
    label = _label(lhscan_config)
    likelihood_results = surface.results()
    mle_results = surface.max_likelihood_estimate()
    for log_scale in [False, True]:
        lhscan_visualize.likelihood(
            likelihood_results,
            log_scale=log_scale,
            mle_results=mle_results,
            label=label,
            figure_folder=figfolder,
        )
    # likelihood intervals are defined relative to the maximum-likelihood estimate
    lhscan_visualize.ratios(
        _ratios(surface, None, log_ratios),
        thresholds=lhscan_configuration.thresholds(lhscan_config),
        mle_results=mle_results,
        label=label,
        figure_folder=figfolder,
    )
    reference = lhscan_configuration.reference(lhscan_config)
    if reference is not None and reference != mle_results.value:
        lhscan_visualize.ratios(
            _ratios(surface, reference, log_ratios),
            mle_results=mle_results,
            label=label,
            figure_folder=figfolder,
        )


lhscan.add_command(evaluate)
lhscan.add_command(mle)
lhscan.add_command(ratio)
lhscan.add_command(interval)
lhscan.add_command(plot)
