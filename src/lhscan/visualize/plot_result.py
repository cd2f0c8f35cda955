"""Visualizes likelihood surface results with matplotlib."""

import logging
import math
import pathlib
from typing import Optional, Sequence

import matplotlib as mpl
import matplotlib.pyplot as plt
import numpy as np

from lhscan.surface.utils import threshold_label
from lhscan.visualize import utils


log = logging.getLogger(__name__)

MPL_STYLE = "seaborn-v0_8-colorblind"


def likelihood(
    par_vals: np.ndarray,
    values: np.ndarray,
    *,
    y_label: str = "likelihood",
    par_mle: Optional[float] = None,
    figure_path: Optional[pathlib.Path] = None,
    close_figure: bool = False,
) -> mpl.figure.Figure:
    """Draws the likelihood (or log-likelihood) as a function of the hypothesis.

    Args:
        par_vals (np.ndarray): hypothesis grid
        values (np.ndarray): likelihood or log-likelihood at each grid point
        y_label (str, optional): label of the vertical axis, defaults to "likelihood"
        par_mle (Optional[float], optional): maximum-likelihood estimate to mark with a
            vertical line, defaults to None (no line)
        figure_path (Optional[pathlib.Path], optional): path where figure should be
            saved, or None to not save it, defaults to None
        close_figure (bool, optional): whether to close each figure immediately after
            saving it, defaults to False (enable when producing many figures to avoid
            memory issues, prevents rendering in notebooks)

    Returns:
        matplotlib.figure.Figure: the likelihood figure
    """
    mpl.style.use(MPL_STYLE)
    fig, ax = plt.subplots(layout="constrained")

    # -inf log-likelihoods are not drawn
    finite = np.isfinite(values)
    ax.plot(par_vals[finite], values[finite], "-", color="C0")
    if len(par_vals) <= 50:
        # markers only for coarse grids
        ax.plot(par_vals[finite], values[finite], "o", color="C0")

    if par_mle is not None:
        ax.axvline(par_mle, linestyle="--", color="C5", label="maximum likelihood")
        ax.legend(frameon=False, fontsize="large")

    ax.set_xlabel("hypothesis")
    ax.set_xlim(par_vals[0], par_vals[-1])
    ax.set_ylabel(y_label)
    utils._style_axes(ax)

    utils._save_and_close(fig, figure_path, close_figure)
    return fig


def ratios(
    par_vals: np.ndarray,
    ratio_vals: np.ndarray,
    thresholds: Sequence[float] = (),
    *,
    log_scale: bool = False,
    figure_path: Optional[pathlib.Path] = None,
    close_figure: bool = False,
) -> mpl.figure.Figure:
    """Draws likelihood ratios with horizontal lines at interval thresholds.

    For ratios relative to the maximum-likelihood estimate, grid points on or above
    a line form the likelihood interval at that threshold.

    Args:
        par_vals (np.ndarray): hypothesis grid
        ratio_vals (np.ndarray): likelihood ratio (or log ratio) at each grid point
        thresholds (Sequence[float], optional): likelihood interval thresholds to
            draw, defaults to none
        log_scale (bool, optional): whether ``ratio_vals`` are log ratios, defaults to
            False
        figure_path (Optional[pathlib.Path], optional): path where figure should be
            saved, or None to not save it, defaults to None
        close_figure (bool, optional): whether to close each figure immediately after
            saving it, defaults to False (enable when producing many figures to avoid
            memory issues, prevents rendering in notebooks)

    Returns:
        matplotlib.figure.Figure: the likelihood ratio figure
    """
    mpl.style.use(MPL_STYLE)
    fig, ax = plt.subplots(layout="constrained")

    finite = np.isfinite(ratio_vals)
    ax.plot(par_vals[finite], ratio_vals[finite], "-", color="C0")

    # text at right edge of the figure, with slight padding
    text_x_pos = par_vals[-1] - 0.01 * (par_vals[-1] - par_vals[0])
    for i_threshold, threshold in enumerate(thresholds):
        level = math.log(threshold) if log_scale else threshold
        ax.axhline(level, linestyle=":", color=f"C{i_threshold + 1}")
        ax.text(
            text_x_pos,
            level,
            threshold_label(threshold),
            ha="right",
            va="bottom",
            color=f"C{i_threshold + 1}",
        )

    ax.set_xlabel("hypothesis")
    ax.set_xlim(par_vals[0], par_vals[-1])
    ax.set_ylabel("log likelihood ratio" if log_scale else "likelihood ratio")
    if not log_scale:
        y_max = float(np.max(ratio_vals[finite])) if np.any(finite) else 1.0
        ax.set_ylim(0, max(1.0, y_max) * 1.1)  # 10% headroom
    utils._style_axes(ax)

    utils._save_and_close(fig, figure_path, close_figure)
    return fig
