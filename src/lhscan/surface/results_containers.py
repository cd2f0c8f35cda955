"""Provides containers for likelihood surface results."""

from typing import List, NamedTuple, Optional, Tuple

import numpy as np


class LikelihoodPoint(NamedTuple):
    """Likelihood evaluated at a single grid point.

    Args:
        value (float): hypothesis value
        likelihood (float): joint likelihood, may underflow to zero
        log_likelihood (float): joint log-likelihood
        nuisance (Optional[float]): nuisance parameter value used, if any
    """

    value: float
    likelihood: float
    log_likelihood: float
    nuisance: Optional[float]


class LikelihoodResults(NamedTuple):
    """Collects the likelihood over a hypothesis grid in one object.

    The likelihood is the product of the per-observation densities and underflows to
    zero for large observation sets, prefer ``log_likelihoods`` in that case.

    Args:
        parameter_values (np.ndarray): hypothesis grid
        likelihoods (np.ndarray): joint likelihood at each grid point
        log_likelihoods (np.ndarray): joint log-likelihood at each grid point
        nuisance_values (Optional[np.ndarray]): nuisance parameter used at each grid
            point, None for families without nuisance parameter
        profiled (bool): whether the nuisance parameter was profiled
    """

    parameter_values: np.ndarray
    likelihoods: np.ndarray
    log_likelihoods: np.ndarray
    nuisance_values: Optional[np.ndarray] = None
    profiled: bool = False

    def points(self) -> List[LikelihoodPoint]:
        """Returns the results per grid point, in grid order.

        Returns:
            List[LikelihoodPoint]: one entry per grid point
        """
        points = []
        for i_par, value in enumerate(self.parameter_values):
            nuisance = (
                float(self.nuisance_values[i_par])
                if self.nuisance_values is not None
                else None
            )
            points.append(
                LikelihoodPoint(
                    float(value),
                    float(self.likelihoods[i_par]),
                    float(self.log_likelihoods[i_par]),
                    nuisance,
                )
            )
        return points


class MaximumLikelihoodResults(NamedTuple):
    """Collects the maximum-likelihood grid point in one object.

    Args:
        value (float): grid value with the highest likelihood
        index (int): position of ``value`` in the grid
        likelihood (float): likelihood at ``value``
        log_likelihood (float): log-likelihood at ``value``
        nuisance (Optional[float]): nuisance parameter at ``value``, if any
        tied (bool): whether other grid points reach the same likelihood, in which
            case the first one in grid order was chosen
        tied_values (np.ndarray): all grid values reaching the maximum
    """

    value: float
    index: int
    likelihood: float
    log_likelihood: float
    nuisance: Optional[float]
    tied: bool
    tied_values: np.ndarray


class RatioResults(NamedTuple):
    """Collects likelihood ratios relative to a reference hypothesis.

    Args:
        reference (float): reference hypothesis value
        parameter_values (np.ndarray): hypothesis grid
        ratios (np.ndarray): ratio (or log ratio) at each grid point
        log_scale (bool): whether ``ratios`` are natural logs of the ratios
    """

    reference: float
    parameter_values: np.ndarray
    ratios: np.ndarray
    log_scale: bool = False


class IntervalResults(NamedTuple):
    """Collects a likelihood interval in one object.

    The interval is the set of grid points with a likelihood ratio to the
    maximum-likelihood point of at least ``threshold``. It need not be contiguous.

    Args:
        threshold (float): likelihood ratio threshold
        parameter_values (np.ndarray): grid values inside the interval
        lower (float): smallest grid value inside the interval
        upper (float): largest grid value inside the interval
        contiguous (bool): whether the values form a single run of the grid
        segments (List[Tuple[float, float]]): (lower, upper) of each contiguous run
    """

    threshold: float
    parameter_values: np.ndarray
    lower: float
    upper: float
    contiguous: bool
    segments: List[Tuple[float, float]]
