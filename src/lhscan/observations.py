"""Provides observation sequences from CSV files or summary counts."""

import csv
import logging
import pathlib
from typing import Optional, Sequence, Union

import numpy as np

from lhscan.exceptions import EmptyInputError


log = logging.getLogger(__name__)


def as_observations(values: Union[Sequence[float], np.ndarray]) -> np.ndarray:
    """Converts values to a read-only one-dimensional array of observations.

    Args:
        values (Union[Sequence[float], np.ndarray]): observed values

    Raises:
        EmptyInputError: when there are no values
        ValueError: when values are not one-dimensional

    Returns:
        np.ndarray: observations
    """
    observations = np.array(values, dtype=float)
    if observations.ndim != 1:
        raise ValueError(
            f"observations must be one-dimensional, got shape {observations.shape}"
        )
    if observations.size == 0:
        raise EmptyInputError("observation set is empty")
    observations.flags.writeable = False
    return observations


def from_counts(successes: int, trials: int) -> np.ndarray:
    """Returns binary observations for a number of successes in a number of trials.

    Successes come first, the order does not matter for the likelihood.

    Args:
        successes (int): number of successes
        trials (int): total number of trials

    Raises:
        ValueError: when the counts are inconsistent

    Returns:
        np.ndarray: array of ones and zeros of length ``trials``
    """
    if successes < 0 or trials < successes:
        raise ValueError(
            f"need 0 <= successes <= trials, got {successes} and {trials}"
        )
    return as_observations([1.0] * successes + [0.0] * (trials - successes))


def load(
    file_path_string: Union[str, pathlib.Path],
    *,
    column: Optional[str] = None,
    delimiter: str = ",",
) -> np.ndarray:
    """Reads observations from a column of a CSV file with a header row.

    Column names are matched exactly as written in the header, surrounding
    whitespace removed.

    Args:
        file_path_string (Union[str, pathlib.Path]): path to the CSV file
        column (Optional[str], optional): name of the column to read, defaults to
            None (the file must then have exactly one column)
        delimiter (str, optional): field delimiter, defaults to ","

    Raises:
        ValueError: when the column is not found, ambiguous, or not numeric
        EmptyInputError: when the file has no header or contains no observations

    Returns:
        np.ndarray: observations
    """
    file_path = pathlib.Path(file_path_string)
    log.info(f"reading observations from {file_path}")
    # header names are used as written, genfromtxt would rewrite e.g. spaces
    with open(file_path, newline="") as f:
        names = next(csv.reader(f, delimiter=delimiter), [])
    names = [name.strip() for name in names]
    if not names:
        raise EmptyInputError(f"{file_path} has no header row")

    if column is None:
        if len(names) != 1:
            raise ValueError(
                f"{file_path} has columns {names}, specify which one to use"
            )
        column = names[0]
    elif column not in names:
        raise ValueError(f"column {column} not found in {file_path}: {names}")

    values = np.genfromtxt(
        file_path,
        delimiter=delimiter,
        skip_header=1,
        usecols=names.index(column),
        dtype=float,
        ndmin=1,
    )
    if np.any(np.isnan(values)):
        raise ValueError(f"column {column} in {file_path} contains non-numeric values")
    observations = as_observations(values)
    log.debug(f"read {observations.size} observation(s) from column {column}")
    return observations
