"""High-level entry point for visualizing likelihood surfaces."""

import logging
import pathlib
from typing import Optional, Sequence, Union

import matplotlib as mpl

from lhscan import surface
from lhscan.visualize import plot_result


log = logging.getLogger(__name__)


def _figure_name(label: str, quantity: str) -> str:
    """Constructs a file name for a figure.

    Args:
        label (str): label of the analysis shown in the figure
        quantity (str): quantity shown, e.g. "likelihood"

    Returns:
        str: name of the file the figure should be saved to
    """
    figure_name = f"{quantity}_{label}" if label else quantity
    figure_name = figure_name.replace(" ", "-").replace("/", "-")
    return figure_name + ".pdf"


def likelihood(
    likelihood_results: surface.LikelihoodResults,
    *,
    log_scale: bool = False,
    mle_results: Optional[surface.MaximumLikelihoodResults] = None,
    label: str = "",
    figure_folder: Union[str, pathlib.Path] = "figures",
    close_figure: bool = True,
    save_figure: bool = True,
) -> mpl.figure.Figure:
    """Visualizes the likelihood, or log-likelihood, over the hypothesis grid.

    Args:
        likelihood_results (surface.LikelihoodResults): likelihood over the grid
        log_scale (bool, optional): whether to show the log-likelihood, defaults to
            False
        mle_results (Optional[surface.MaximumLikelihoodResults], optional):
            maximum-likelihood estimate to mark, defaults to None
        label (str, optional): label included in the figure name, defaults to ""
        figure_folder (Union[str, pathlib.Path], optional): path to the folder to save
            figures in, defaults to "figures"
        close_figure (bool, optional): whether to close figure, defaults to True
        save_figure (bool, optional): whether to save figure, defaults to True

    Returns:
        matplotlib.figure.Figure: the likelihood figure
    """
    quantity = "log_likelihood" if log_scale else "likelihood"
    # path is None if figure should not be saved
    figure_path = (
        pathlib.Path(figure_folder) / _figure_name(label, quantity)
        if save_figure
        else None
    )
    values = (
        likelihood_results.log_likelihoods
        if log_scale
        else likelihood_results.likelihoods
    )
    y_label = "log-likelihood" if log_scale else "likelihood"
    if likelihood_results.profiled:
        y_label = "profile " + y_label

    fig = plot_result.likelihood(
        likelihood_results.parameter_values,
        values,
        y_label=y_label,
        par_mle=mle_results.value if mle_results is not None else None,
        figure_path=figure_path,
        close_figure=close_figure,
    )
    return fig


def ratios(
    ratio_results: surface.RatioResults,
    *,
    thresholds: Sequence[Union[str, float]] = (),
    mle_results: Optional[surface.MaximumLikelihoodResults] = None,
    label: str = "",
    figure_folder: Union[str, pathlib.Path] = "figures",
    close_figure: bool = True,
    save_figure: bool = True,
) -> mpl.figure.Figure:
    """Visualizes likelihood ratios and likelihood interval thresholds.

    Threshold lines mark likelihood intervals only for ratios taken relative to the
    maximum-likelihood estimate. If ``mle_results`` shows that the ratios use another
    reference, no threshold lines are drawn and the figure name includes
    "reference".

    Args:
        ratio_results (surface.RatioResults): likelihood ratios or log ratios
        thresholds (Sequence[Union[str, float]], optional): likelihood interval
            thresholds or preset names, defaults to none
        mle_results (Optional[surface.MaximumLikelihoodResults], optional):
            maximum-likelihood estimate of the surface, defaults to None (ratios are
            assumed to be relative to it)
        label (str, optional): label included in the figure name, defaults to ""
        figure_folder (Union[str, pathlib.Path], optional): path to the folder to save
            figures in, defaults to "figures"
        close_figure (bool, optional): whether to close figure, defaults to True
        save_figure (bool, optional): whether to save figure, defaults to True

    Returns:
        matplotlib.figure.Figure: the likelihood ratio figure
    """
    quantity = "log_ratio" if ratio_results.log_scale else "ratio"
    threshold_values = [
        surface.resolve_threshold(threshold) for threshold in thresholds
    ]
    if mle_results is not None and ratio_results.reference != mle_results.value:
        quantity += "_reference"
        if threshold_values:
            log.warning(
                f"ratios are relative to {ratio_results.reference}, not to the "
                "maximum-likelihood estimate, skipping likelihood interval thresholds"
            )
            threshold_values = []

    # path is None if figure should not be saved
    figure_path = (
        pathlib.Path(figure_folder) / _figure_name(label, quantity)
        if save_figure
        else None
    )

    fig = plot_result.ratios(
        ratio_results.parameter_values,
        ratio_results.ratios,
        threshold_values,
        log_scale=ratio_results.log_scale,
        figure_path=figure_path,
        close_figure=close_figure,
    )
    return fig
