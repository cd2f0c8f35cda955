"""Density families describing how a hypothesis assigns probability to data.

A family bundles the density of a single observation, its native log form, and the
support checks for observations and parameters. The likelihood surface only talks to
families through this interface, so new families can be added without changes to the
evaluation itself.
"""

import logging
from typing import Any, Callable, Dict, Optional, Type

import numpy as np
import scipy.stats

from lhscan.exceptions import DomainError


log = logging.getLogger(__name__)

# maps (observations, hypothesis) to the nuisance value maximizing the density
NuisanceEstimator = Callable[[np.ndarray, float], float]


def sd_about_mean(observations: np.ndarray, mean: float, ddof: int = 1) -> float:
    """Returns the standard deviation of observations around a fixed mean.

    This is the plug-in estimate of the normal standard deviation when the mean is
    held at a hypothesized value: ``sqrt(sum((x - mean)**2) / (n - ddof))``. With
    ``ddof=0`` it is the exact maximizer of the normal likelihood for that mean.

    Args:
        observations (np.ndarray): observed values
        mean (float): hypothesized mean
        ddof (int, optional): delta degrees of freedom, defaults to 1

    Raises:
        DomainError: when there are not more observations than ``ddof``

    Returns:
        float: standard deviation about ``mean``
    """
    observations = np.asarray(observations, dtype=float)
    dof = observations.size - ddof
    if dof <= 0:
        raise DomainError(
            f"need more than {ddof} observation(s) to estimate the standard deviation"
        )
    return float(np.sqrt(np.sum((observations - mean) ** 2) / dof))


class Family:
    """Base class for density families.

    Subclasses implement ``density`` and preferably ``log_density``. Observations
    are passed as a whole array, hypothesis and nuisance as scalars.
    """

    name = "family"
    requires_nuisance = False
    nuisance_estimator: Optional[NuisanceEstimator] = None

    def check_observations(self, observations: np.ndarray) -> None:
        """Raises a ``DomainError`` if observations are outside the family support.

        Args:
            observations (np.ndarray): observed values
        """
        if not np.all(np.isfinite(observations)):
            raise DomainError(f"{self.name} observations must be finite")

    def check_hypothesis(self, hypothesis: float, nuisance: Optional[float]) -> None:
        """Raises a ``DomainError`` if parameters are outside the family support.

        Args:
            hypothesis (float): value of the parameter of interest
            nuisance (Optional[float]): value of the nuisance parameter, if any
        """
        if not np.isfinite(hypothesis):
            raise DomainError(
                f"{self.name} hypothesis must be finite, got {hypothesis}"
            )

    def density(
        self, observations: np.ndarray, hypothesis: float, nuisance: Optional[float]
    ) -> np.ndarray:
        """Returns the density (or probability mass) of each observation.

        Args:
            observations (np.ndarray): observed values
            hypothesis (float): value of the parameter of interest
            nuisance (Optional[float]): value of the nuisance parameter, if any

        Returns:
            np.ndarray: density per observation
        """
        raise NotImplementedError

    def log_density(
        self, observations: np.ndarray, hypothesis: float, nuisance: Optional[float]
    ) -> np.ndarray:
        """Returns the log density of each observation.

        Families with a native log form override this, the fallback takes the log of
        ``density`` and loses precision where the density underflows.

        Args:
            observations (np.ndarray): observed values
            hypothesis (float): value of the parameter of interest
            nuisance (Optional[float]): value of the nuisance parameter, if any

        Returns:
            np.ndarray: log density per observation
        """
        with np.errstate(divide="ignore"):
            return np.log(self.density(observations, hypothesis, nuisance))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class BernoulliFamily(Family):
    """Success / failure observations (0 or 1) with success probability ``p``.

    The closed interval [0, 1] is allowed for ``p``, the likelihood at the edges is
    zero as soon as both outcomes were observed.
    """

    name = "bernoulli"

    def check_observations(self, observations: np.ndarray) -> None:
        if not np.all(np.isin(observations, [0, 1])):
            raise DomainError("bernoulli observations must be 0 or 1")

    def check_hypothesis(self, hypothesis: float, nuisance: Optional[float]) -> None:
        if not 0 <= hypothesis <= 1:
            raise DomainError(
                f"bernoulli success probability must be in [0, 1], got {hypothesis}"
            )

    def density(
        self, observations: np.ndarray, hypothesis: float, nuisance: Optional[float]
    ) -> np.ndarray:
        return scipy.stats.bernoulli.pmf(observations, hypothesis)

    def log_density(
        self, observations: np.ndarray, hypothesis: float, nuisance: Optional[float]
    ) -> np.ndarray:
        return scipy.stats.bernoulli.logpmf(observations, hypothesis)


class NormalFamily(Family):
    """Real-valued observations, the hypothesis is the mean.

    The standard deviation is a nuisance parameter. It is either held fixed or
    profiled with ``sd_about_mean``.
    """

    name = "normal"
    requires_nuisance = True
    nuisance_estimator = staticmethod(sd_about_mean)

    def check_hypothesis(self, hypothesis: float, nuisance: Optional[float]) -> None:
        super().check_hypothesis(hypothesis, nuisance)
        if nuisance is not None and not (np.isfinite(nuisance) and nuisance > 0):
            raise DomainError(
                f"normal standard deviation must be positive, got {nuisance}"
            )

    def density(
        self, observations: np.ndarray, hypothesis: float, nuisance: Optional[float]
    ) -> np.ndarray:
        return scipy.stats.norm.pdf(observations, loc=hypothesis, scale=nuisance)

    def log_density(
        self, observations: np.ndarray, hypothesis: float, nuisance: Optional[float]
    ) -> np.ndarray:
        return scipy.stats.norm.logpdf(observations, loc=hypothesis, scale=nuisance)


class PoissonFamily(Family):
    """Non-negative integer counts, the hypothesis is the rate."""

    name = "poisson"

    def check_observations(self, observations: np.ndarray) -> None:
        super().check_observations(observations)
        if np.any(observations < 0) or np.any(observations != np.floor(observations)):
            raise DomainError("poisson observations must be non-negative integers")

    def check_hypothesis(self, hypothesis: float, nuisance: Optional[float]) -> None:
        super().check_hypothesis(hypothesis, nuisance)
        if hypothesis < 0:
            raise DomainError(f"poisson rate must be non-negative, got {hypothesis}")

    def density(
        self, observations: np.ndarray, hypothesis: float, nuisance: Optional[float]
    ) -> np.ndarray:
        return scipy.stats.poisson.pmf(observations, hypothesis)

    def log_density(
        self, observations: np.ndarray, hypothesis: float, nuisance: Optional[float]
    ) -> np.ndarray:
        return scipy.stats.poisson.logpmf(observations, hypothesis)


class CallableFamily(Family):
    """Wraps a user-supplied density function of a single observation.

    The function is called as ``density_fn(observation, hypothesis)``, or with the
    nuisance value as third argument when one is used. It should raise
    ``DomainError`` for arguments outside its support.

    Args:
        density_fn (Callable[..., float]): density of a single observation
        log_density_fn (Optional[Callable[..., float]], optional): native log form
            of ``density_fn``, defaults to None (use the log of the density)
        requires_nuisance (bool, optional): whether a nuisance value must be
            supplied, defaults to False
        nuisance_estimator (Optional[NuisanceEstimator], optional): closed-form
            estimator used when profiling, defaults to None
        name (str, optional): name used in messages, defaults to "custom"
    """

    def __init__(
        self,
        density_fn: Callable[..., float],
        *,
        log_density_fn: Optional[Callable[..., float]] = None,
        requires_nuisance: bool = False,
        nuisance_estimator: Optional[NuisanceEstimator] = None,
        name: str = "custom",
    ) -> None:
        self.density_fn = density_fn
        self.log_density_fn = log_density_fn
        self.requires_nuisance = requires_nuisance
        self.nuisance_estimator = nuisance_estimator
        self.name = name

    def _apply(
        self,
        func: Callable[..., float],
        observations: np.ndarray,
        hypothesis: float,
        nuisance: Optional[float],
    ) -> np.ndarray:
        args = () if nuisance is None else (nuisance,)
        return np.asarray(
            [func(obs, hypothesis, *args) for obs in observations], dtype=float
        )

    def density(
        self, observations: np.ndarray, hypothesis: float, nuisance: Optional[float]
    ) -> np.ndarray:
        densities = self._apply(self.density_fn, observations, hypothesis, nuisance)
        if np.any(np.isnan(densities)) or np.any(densities < 0):
            raise DomainError(
                f"{self.name} density must be non-negative, evaluated at {hypothesis}"
            )
        return densities

    def log_density(
        self, observations: np.ndarray, hypothesis: float, nuisance: Optional[float]
    ) -> np.ndarray:
        if self.log_density_fn is None:
            return super().log_density(observations, hypothesis, nuisance)
        return self._apply(self.log_density_fn, observations, hypothesis, nuisance)

    def __repr__(self) -> str:
        return f"CallableFamily(name={self.name!r})"


FAMILIES: Dict[str, Type[Family]] = {
    "bernoulli": BernoulliFamily,
    "normal": NormalFamily,
    "poisson": PoissonFamily,
}


def get(name: str, **kwargs: Any) -> Family:
    """Returns a family instance from its name.

    Args:
        name (str): name of the family, case insensitive
        **kwargs: passed through to the family constructor

    Raises:
        ValueError: when no family with this name exists

    Returns:
        Family: the family
    """
    family_class = FAMILIES.get(name.lower())
    if family_class is None:
        raise ValueError(
            f"unknown family {name}, available: {', '.join(sorted(FAMILIES))}"
        )
    log.debug(f"using {family_class.__name__}")
    return family_class(**kwargs)
