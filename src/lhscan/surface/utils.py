"""
Provide utility functions for likelihood surfaces.
"""

import fractions
import math
from typing import Dict, List, Tuple, Union

import numpy as np

from lhscan.exceptions import InvalidThresholdError
from lhscan.surface.results_containers import LikelihoodResults, RatioResults


# conventional likelihood interval thresholds, neither is a default
THRESHOLD_PRESETS: Dict[str, float] = {"fairly_strong": 1 / 8, "strong": 1 / 32}


def resolve_threshold(threshold: Union[str, float]) -> float:
    """
    Returns the numeric value of a likelihood
    interval threshold, which may be given as
    the name of a preset or as a string such
    as "1/8" or "0.125".

    Args:
        threshold (Union[str, float]): threshold in (0, 1] or preset name

    Raises:
        InvalidThresholdError: for unknown presets or values outside (0, 1]

    Returns:
        float: threshold value
    """
    if isinstance(threshold, str):
        if threshold in THRESHOLD_PRESETS:
            return THRESHOLD_PRESETS[threshold]
        try:
            threshold = float(fractions.Fraction(threshold))
        except (ValueError, ZeroDivisionError):
            raise InvalidThresholdError(
                f"unknown threshold preset {threshold}, available: "
                f"{', '.join(THRESHOLD_PRESETS)}"
            ) from None

    value = float(threshold)
    # NaN fails the comparison as well
    if not 0 < value <= 1:
        raise InvalidThresholdError(f"threshold must be in (0, 1], got {threshold}")
    return value


def threshold_label(threshold: float) -> str:
    """
    Returns a compact label for a threshold,
    written as 1/k when it is the reciprocal
    of an integer.

    Args:
        threshold (float): threshold value

    Returns:
        str: label such as "1/8"
    """
    reciprocal = 1 / threshold
    if math.isclose(reciprocal, round(reciprocal)):
        return f"1/{round(reciprocal)}"
    return f"{threshold:.3g}"


def contiguous_segments(
    parameter_values: np.ndarray, mask: np.ndarray
) -> List[Tuple[float, float]]:
    """
    Returns the (lower, upper) grid values of
    each run of consecutive selected grid points.

    Args:
        parameter_values (np.ndarray): hypothesis grid
        mask (np.ndarray): boolean selection of grid points

    Returns:
        List[Tuple[float, float]]: one entry per contiguous run, in grid order
    """
    segments: List[Tuple[float, float]] = []
    start = None
    for i_par, selected in enumerate(mask):
        if selected and start is None:
            start = i_par
        elif not selected and start is not None:
            segments.append(
                (float(parameter_values[start]), float(parameter_values[i_par - 1]))
            )
            start = None
    if start is not None:
        segments.append((float(parameter_values[start]), float(parameter_values[-1])))
    return segments


def series(
    results: Union[LikelihoodResults, RatioResults], quantity: str = "likelihood"
) -> List[Tuple[float, float]]:
    """
    Returns (x, y) pairs of a result for
    plotting or reporting tools.

    Args:
        results (Union[LikelihoodResults, RatioResults]): results to convert
        quantity (str, optional): "likelihood" or "log_likelihood" for likelihood
            results, ignored for ratio results, defaults to "likelihood"

    Raises:
        ValueError: when the quantity is unknown

    Returns:
        List[Tuple[float, float]]: pairs of grid value and quantity, in grid order
    """
    if isinstance(results, RatioResults):
        y_values = results.ratios
    elif quantity == "likelihood":
        y_values = results.likelihoods
    elif quantity == "log_likelihood":
        y_values = results.log_likelihoods
    else:
        raise ValueError(f"unknown quantity {quantity}")
    return [(float(x), float(y)) for x, y in zip(results.parameter_values, y_values)]
