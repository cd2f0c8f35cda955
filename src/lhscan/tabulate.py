"""Creates tables of likelihood surface results."""

import logging
import pathlib
from typing import Any, Dict, List, Optional, Union

import tabulate

from lhscan.surface import LikelihoodResults, RatioResults


log = logging.getLogger(__name__)


def _save_table(
    table: List[Dict[str, Any]],
    table_folder: pathlib.Path,
    table_label: str,
    table_format: str,
) -> pathlib.Path:
    """Saves a table in a specific format in a given folder.

    Args:
        table (List[Dict[str, Any]]): table rows to save
        table_folder (pathlib.Path): path to the folder to save tables in
        table_label (str): label for the table to include in the file name
        table_format (str): format in which to save the table

    Returns:
        pathlib.Path: path of the saved table
    """
    if table_format in ["plain", "simple", "tsv"]:
        save_suffix = "txt"
    elif table_format == "latex":
        save_suffix = "tex"
    else:
        save_suffix = table_format

    table_folder.mkdir(parents=True, exist_ok=True)
    table_path = table_folder / f"likelihood_{table_label}.{save_suffix}"

    table_str = (
        tabulate.tabulate(table, headers="keys", tablefmt=table_format)
        + "\n"  # tabulate does not add a newline at the end
    )
    log.info(f"saving table as {table_path}")
    table_path.write_text(table_str)
    return table_path


def _rows(
    likelihood_results: LikelihoodResults,
    ratio_results: Optional[RatioResults],
) -> List[Dict[str, Any]]:
    """Builds one table row per grid point.

    Args:
        likelihood_results (LikelihoodResults): likelihood over the grid
        ratio_results (Optional[RatioResults]): ratios over the same grid, or None

    Returns:
        List[Dict[str, Any]]: table rows
    """
    rows = []
    for i_par, point in enumerate(likelihood_results.points()):
        row: Dict[str, Any] = {
            "hypothesis": f"{point.value:.4g}",
            "likelihood": f"{point.likelihood:.4e}",
            "log-likelihood": f"{point.log_likelihood:.4f}",
        }
        if point.nuisance is not None:
            row["nuisance"] = f"{point.nuisance:.4f}"
        if ratio_results is not None:
            header = "log ratio" if ratio_results.log_scale else "ratio"
            row[header] = f"{ratio_results.ratios[i_par]:.4g}"
        rows.append(row)
    return rows


def surface(
    likelihood_results: LikelihoodResults,
    *,
    ratio_results: Optional[RatioResults] = None,
    table_folder: Union[str, pathlib.Path] = "tables",
    table_label: str = "surface",
    table_format: str = "simple",
    save_table: bool = True,
) -> List[Dict[str, Any]]:
    """Generates a table of likelihood, log-likelihood and ratio per grid point.

    The table is printed and optionally saved to a file. The ``table_format`` argument
    is passed through to ``tabulate``, see https://github.com/astanin/python-tabulate
    for supported formats.

    Args:
        likelihood_results (LikelihoodResults): likelihood over the grid
        ratio_results (Optional[RatioResults], optional): likelihood ratios (or log
            ratios) over the same grid, defaults to None (no ratio column)
        table_folder (Union[str, pathlib.Path], optional): path to the folder to save
            tables in, defaults to "tables"
        table_label (str, optional): label included in the file name, defaults to
            "surface"
        table_format (str, optional): format in which to print and save the table,
            defaults to "simple"
        save_table (bool, optional): whether to save the table, defaults to True

    Raises:
        ValueError: when ratios do not belong to the same grid

    Returns:
        List[Dict[str, Any]]: table rows
    """
    if ratio_results is not None and len(ratio_results.ratios) != len(
        likelihood_results.parameter_values
    ):
        raise ValueError("likelihood and ratio results need to use the same grid")

    table = _rows(likelihood_results, ratio_results)
    log.info(
        "likelihood surface:\n"
        + tabulate.tabulate(table, headers="keys", tablefmt=table_format)
    )
    if save_table:
        _save_table(table, pathlib.Path(table_folder), table_label, table_format)
    return table
