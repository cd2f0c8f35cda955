import logging
import pathlib
from unittest import mock

import numpy as np
import pytest

from lhscan import surface
from lhscan import tabulate


@pytest.fixture
def likelihood_results():
    likelihoods = np.asarray([0.015625, 0.065536])
    return surface.LikelihoodResults(
        np.asarray([0.5, 0.8]), likelihoods, np.log(likelihoods)
    )


@pytest.mark.parametrize(
    "table_format, suffix",
    [("simple", "txt"), ("plain", "txt"), ("tsv", "txt"), ("latex", "tex")],
)
def test__save_table(tmp_path, caplog, table_format, suffix):
    caplog.set_level(logging.DEBUG)
    table = [{"hypothesis": "0.5", "likelihood": "1.5625e-02"}]
    table_path = tabulate._save_table(table, tmp_path / "tables", "abc", table_format)
    assert table_path == tmp_path / "tables" / f"likelihood_abc.{suffix}"
    assert table_path.is_file()
    assert table_path.read_text().endswith("\n")
    assert f"saving table as {table_path}" in [rec.message for rec in caplog.records]


def test__save_table_other_format(tmp_path):
    table = [{"hypothesis": "0.5"}]
    table_path = tabulate._save_table(table, tmp_path, "abc", "html")
    assert table_path == tmp_path / "likelihood_abc.html"
    assert "<table>" in table_path.read_text()


def test__rows(likelihood_results):
    assert tabulate._rows(likelihood_results, None) == [
        {
            "hypothesis": "0.5",
            "likelihood": "1.5625e-02",
            "log-likelihood": "-4.1589",
        },
        {
            "hypothesis": "0.8",
            "likelihood": "6.5536e-02",
            "log-likelihood": "-2.7252",
        },
    ]

    # with nuisance parameter and ratios
    likelihood_results = likelihood_results._replace(
        nuisance_values=np.asarray([0.5, 0.25])
    )
    ratio_results = surface.RatioResults(
        0.5, likelihood_results.parameter_values, np.asarray([1.0, 4.194304])
    )
    rows = tabulate._rows(likelihood_results, ratio_results)
    assert rows[0]["nuisance"] == "0.5000"
    assert rows[1]["nuisance"] == "0.2500"
    assert rows[0]["ratio"] == "1"
    assert rows[1]["ratio"] == "4.194"

    log_ratio_results = ratio_results._replace(
        ratios=np.asarray([0.0, 1.4337]), log_scale=True
    )
    rows = tabulate._rows(likelihood_results, log_ratio_results)
    assert "ratio" not in rows[0]
    assert rows[1]["log ratio"] == "1.434"


@mock.patch("lhscan.tabulate._save_table")
def test_surface(mock_save, likelihood_results, caplog):
    caplog.set_level(logging.DEBUG)
    table = tabulate.surface(likelihood_results)
    assert table == tabulate._rows(likelihood_results, None)
    assert "likelihood surface:" in caplog.records[0].message
    assert "log-likelihood" in caplog.records[0].message
    assert mock_save.call_args_list == [
        ((table, pathlib.Path("tables"), "surface", "simple"), {})
    ]
    caplog.clear()

    # custom settings, ratios
    ratio_results = surface.RatioResults(
        0.8, likelihood_results.parameter_values, np.asarray([0.2384, 1.0])
    )
    table = tabulate.surface(
        likelihood_results,
        ratio_results=ratio_results,
        table_folder="abc",
        table_label="coin-flips",
        table_format="latex",
    )
    assert [row["ratio"] for row in table] == ["0.2384", "1"]
    assert mock_save.call_args == (
        (table, pathlib.Path("abc"), "coin-flips", "latex"),
        {},
    )

    # no table saved
    tabulate.surface(likelihood_results, save_table=False)
    assert mock_save.call_count == 2

    # ratios from a different grid
    ratio_results = surface.RatioResults(
        0.8, np.asarray([0.8]), np.asarray([1.0])
    )
    with pytest.raises(ValueError, match="need to use the same grid"):
        tabulate.surface(likelihood_results, ratio_results=ratio_results)
