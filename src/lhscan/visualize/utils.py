"""Provides visualization utilities."""

import logging
import pathlib
from typing import Optional

import matplotlib as mpl
import matplotlib.pyplot as plt


log = logging.getLogger(__name__)


def _save_and_close(
    fig: mpl.figure.Figure, path: Optional[pathlib.Path], close_figure: bool
) -> None:
    """Saves a figure at a given location if path is provided and optionally closes it.

    Args:
        fig (matplotlib.figure.Figure): figure to save
        path (Optional[pathlib.Path]): path where figure should be saved, or None to not
            save it
        close_figure (bool): whether to close figure after saving
    """
    if path is not None:
        path.parent.mkdir(parents=True, exist_ok=True)
        log.info(f"saving figure as {path}")
        fig.savefig(path)
    if close_figure:
        plt.close(fig)


def _style_axes(ax: mpl.axes.Axes) -> None:
    """Applies the common axis styling of all result figures.

    Args:
        ax (matplotlib.axes.Axes): axes to style
    """
    # increase font sizes
    for item in (
        [ax.xaxis.label, ax.yaxis.label] + ax.get_xticklabels() + ax.get_yticklabels()
    ):
        item.set_fontsize("large")

    # minor ticks
    for axis in [ax.xaxis, ax.yaxis]:
        axis.set_minor_locator(mpl.ticker.AutoMinorLocator())

    ax.tick_params(axis="both", which="major", pad=8)
    ax.tick_params(direction="in", top=True, right=True, which="both")
