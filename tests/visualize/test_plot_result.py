import matplotlib.pyplot as plt
import numpy as np

from lhscan.visualize import plot_result


def test_no_open_figure():
    # ensure there are no open figures at the start, if this fails then some other part
    # of the test suite opened a figure without closing it
    assert len(plt.get_fignums()) == 0


def test_likelihood(tmp_path):
    fname = tmp_path / "fig.pdf"
    par_vals = np.linspace(0, 1, 11)
    values = par_vals**5 * (1 - par_vals)
    fig = plot_result.likelihood(par_vals, values, par_mle=0.8, figure_path=fname)
    assert fname.is_file()
    ax = fig.axes[0]
    assert ax.get_xlabel() == "hypothesis"
    assert ax.get_ylabel() == "likelihood"
    assert ax.get_xlim() == (0.0, 1.0)
    # line and markers for coarse grids, vertical line at the estimate
    assert len(ax.lines) == 3
    assert ax.lines[2].get_xdata()[0] == 0.8
    assert ax.get_legend() is not None

    # single open figure, does not change when calling with close_figure
    assert len(plt.get_fignums()) == 1
    plot_result.likelihood(par_vals, values, figure_path=fname, close_figure=True)
    assert len(plt.get_fignums()) == 1
    plt.close("all")


def test_likelihood_log_scale():
    # log-likelihood of -inf at the grid edges is not drawn
    par_vals = np.linspace(0, 1, 101)
    with np.errstate(divide="ignore"):
        values = 5 * np.log(par_vals) + np.log(1 - par_vals)
    fig = plot_result.likelihood(par_vals, values, y_label="log-likelihood")
    ax = fig.axes[0]
    assert ax.get_ylabel() == "log-likelihood"
    # no markers for fine grids
    assert len(ax.lines) == 1
    assert len(ax.lines[0].get_xdata()) == 99
    assert ax.get_legend() is None
    plt.close("all")


def test_ratios(tmp_path):
    fname = tmp_path / "fig.pdf"
    par_vals = np.linspace(0, 1, 101)
    ratio_vals = (par_vals**5 * (1 - par_vals)) / ((5 / 6) ** 5 / 6)
    fig = plot_result.ratios(par_vals, ratio_vals, [1 / 8, 1 / 32], figure_path=fname)
    assert fname.is_file()
    ax = fig.axes[0]
    assert ax.get_ylabel() == "likelihood ratio"
    assert ax.get_ylim()[0] == 0
    # ratio and one line per threshold
    assert len(ax.lines) == 3
    assert ax.lines[1].get_ydata()[0] == 1 / 8
    assert [text.get_text() for text in ax.texts] == ["1/8", "1/32"]

    # single open figure, does not change when calling with close_figure
    assert len(plt.get_fignums()) == 1
    plot_result.ratios(par_vals, ratio_vals, figure_path=fname, close_figure=True)
    assert len(plt.get_fignums()) == 1
    plt.close("all")


def test_ratios_log_scale():
    par_vals = np.asarray([4.0, 5.0])
    log_ratios = np.asarray([0.0, -2700.0])
    fig = plot_result.ratios(par_vals, log_ratios, [0.5], log_scale=True)
    ax = fig.axes[0]
    assert ax.get_ylabel() == "log likelihood ratio"
    assert np.isclose(ax.lines[1].get_ydata()[0], np.log(0.5))
    assert [text.get_text() for text in ax.texts] == ["1/2"]
    plt.close("all")
