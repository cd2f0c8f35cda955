"""High-level entry point for likelihood surfaces."""

import logging
from typing import Optional, Sequence, Tuple, Union

import numpy as np

from lhscan import families
from lhscan.exceptions import (
    DomainError,
    EmptyInputError,
    InvalidGridError,
    MissingParameterError,
    ZeroReferenceError,
)
from lhscan.observations import as_observations
from lhscan.surface.results_containers import (
    IntervalResults,
    LikelihoodPoint,
    LikelihoodResults,
    MaximumLikelihoodResults,
    RatioResults,
)
from lhscan.surface.utils import (
    contiguous_segments,
    resolve_threshold,
    series,
    THRESHOLD_PRESETS,
    threshold_label,
)


__all__ = [
    "IntervalResults",
    "LikelihoodPoint",
    "LikelihoodResults",
    "LikelihoodSurface",
    "MaximumLikelihoodResults",
    "RatioResults",
    "THRESHOLD_PRESETS",
    "print_results",
    "resolve_threshold",
    "series",
]


log = logging.getLogger(__name__)


def _as_grid(grid: Union[Sequence[float], np.ndarray]) -> np.ndarray:
    """Converts a hypothesis grid to a read-only array and validates it.

    Args:
        grid (Union[Sequence[float], np.ndarray]): candidate parameter values

    Raises:
        EmptyInputError: when the grid is empty
        InvalidGridError: when the grid is not one-dimensional, not finite, or not
            strictly increasing

    Returns:
        np.ndarray: the grid
    """
    values = np.array(grid, dtype=float)
    if values.ndim != 1:
        raise InvalidGridError(
            f"grid must be one-dimensional, got shape {values.shape}"
        )
    if values.size == 0:
        raise EmptyInputError("hypothesis grid is empty")
    if not np.all(np.isfinite(values)):
        raise InvalidGridError("grid values must be finite")
    if np.any(np.diff(values) <= 0):
        raise InvalidGridError("grid values must be strictly increasing")
    values.flags.writeable = False
    return values


def _read_only(array: np.ndarray) -> np.ndarray:
    array.flags.writeable = False
    return array


class LikelihoodSurface:
    """Likelihood of observed data over a grid of hypotheses.

    The nuisance parameter of the family, if it has one, is either held at
    ``nuisance`` or profiled with ``nuisance_estimator`` at every grid point. This
    choice defines the surface used for the maximum-likelihood estimate, ratios and
    intervals. ``evaluate`` and ``evaluate_profiled`` can be used to compare both.

    Inputs are copied into read-only arrays, the surface is not modified after
    construction.

    Args:
        observations (Union[Sequence[float], np.ndarray]): observed values
        grid (Union[Sequence[float], np.ndarray]): strictly increasing hypothesis
            values
        family (families.Family): density family of the observations
        nuisance (Optional[float], optional): fixed nuisance parameter value,
            defaults to None
        nuisance_estimator (Optional[families.NuisanceEstimator], optional):
            closed-form estimator to profile the nuisance parameter, defaults to None

    Raises:
        ValueError: when both ``nuisance`` and ``nuisance_estimator`` are given
        EmptyInputError: when observations or grid are empty
        InvalidGridError: when the grid is not strictly increasing
        DomainError: when observations are outside the family support
    """

    def __init__(
        self,
        observations: Union[Sequence[float], np.ndarray],
        grid: Union[Sequence[float], np.ndarray],
        family: families.Family,
        *,
        nuisance: Optional[float] = None,
        nuisance_estimator: Optional[families.NuisanceEstimator] = None,
    ) -> None:
        if nuisance is not None and nuisance_estimator is not None:
            raise ValueError(
                "specify either a fixed nuisance value or a nuisance estimator"
            )
        self.observations = as_observations(observations)
        self.grid = _as_grid(grid)
        self.family = family
        self.family.check_observations(self.observations)
        self.nuisance = nuisance
        self.nuisance_estimator = nuisance_estimator
        self._results: Optional[LikelihoodResults] = None

    def __repr__(self) -> str:
        return (
            f"LikelihoodSurface({self.family!r}, {self.observations.size} "
            f"observation(s), {self.grid.size} grid point(s))"
        )

    def _evaluate_point(
        self, hypothesis: float, nuisance: Optional[float]
    ) -> Tuple[float, float]:
        """Returns likelihood and log-likelihood for a single hypothesis.

        Both are computed independently: the product of densities and the sum of
        native log densities.
        """
        self.family.check_hypothesis(hypothesis, nuisance)
        densities = self.family.density(self.observations, hypothesis, nuisance)
        log_densities = self.family.log_density(self.observations, hypothesis, nuisance)
        likelihood = float(np.prod(densities))
        log_likelihood = float(np.sum(log_densities))
        log.debug(
            f"hypothesis {hypothesis:.4g}: likelihood = {likelihood:.4g}, "
            f"log-likelihood = {log_likelihood:.4f}"
        )
        return likelihood, log_likelihood

    def _fixed_nuisance(self, fixed_nuisance: Optional[float]) -> Optional[float]:
        if fixed_nuisance is None:
            fixed_nuisance = self.nuisance
        if self.family.requires_nuisance and fixed_nuisance is None:
            raise MissingParameterError(
                f"{self.family.name} family requires a nuisance parameter, fix it or "
                "use a profiled evaluation"
            )
        if not self.family.requires_nuisance and fixed_nuisance is not None:
            log.warning(
                f"{self.family.name} family has no nuisance parameter, ignoring "
                f"value {fixed_nuisance}"
            )
            fixed_nuisance = None
        return fixed_nuisance

    def _estimator(
        self, nuisance_estimator: Optional[families.NuisanceEstimator]
    ) -> families.NuisanceEstimator:
        estimator = (
            nuisance_estimator
            or self.nuisance_estimator
            or self.family.nuisance_estimator
        )
        if estimator is None:
            raise MissingParameterError(
                f"no nuisance estimator available for {self.family.name} family"
            )
        return estimator

    def _collect(
        self,
        likelihoods: np.ndarray,
        log_likelihoods: np.ndarray,
        nuisance_values: Optional[np.ndarray],
        profiled: bool,
    ) -> LikelihoodResults:
        if np.any(np.isnan(log_likelihoods)) or np.any(np.isnan(likelihoods)):
            raise DomainError(f"{self.family.name} density evaluated to NaN")
        underflow = (likelihoods == 0) & np.isfinite(log_likelihoods)
        if np.any(underflow):
            log.warning(
                f"likelihood underflows to zero at {np.sum(underflow)} grid point(s), "
                "use log-likelihoods instead"
            )
        if nuisance_values is not None:
            nuisance_values = _read_only(nuisance_values)
        return LikelihoodResults(
            self.grid,
            _read_only(likelihoods),
            _read_only(log_likelihoods),
            nuisance_values,
            profiled,
        )

    def evaluate(self, fixed_nuisance: Optional[float] = None) -> LikelihoodResults:
        """Evaluates likelihood and log-likelihood at every grid point.

        Args:
            fixed_nuisance (Optional[float], optional): nuisance parameter value,
                defaults to None (use the value the surface was created with)

        Raises:
            MissingParameterError: when the family needs a nuisance parameter and
                none is available
            DomainError: when a grid point is outside the family support

        Returns:
            LikelihoodResults: likelihood per grid point, in grid order
        """
        nuisance = self._fixed_nuisance(fixed_nuisance)
        nuisance_info = (
            f" with nuisance parameter {nuisance}" if nuisance is not None else ""
        )
        log.info(
            f"evaluating {self.family.name} likelihood of {self.observations.size} "
            f"observation(s) at {self.grid.size} grid point(s){nuisance_info}"
        )
        likelihoods = np.zeros(self.grid.size)
        log_likelihoods = np.zeros(self.grid.size)
        for i_par, hypothesis in enumerate(self.grid):
            likelihoods[i_par], log_likelihoods[i_par] = self._evaluate_point(
                float(hypothesis), nuisance
            )
        nuisance_values = (
            np.full(self.grid.size, nuisance, dtype=float)
            if nuisance is not None
            else None
        )
        return self._collect(likelihoods, log_likelihoods, nuisance_values, False)

    def evaluate_profiled(
        self, nuisance_estimator: Optional[families.NuisanceEstimator] = None
    ) -> LikelihoodResults:
        """Evaluates the profile likelihood at every grid point.

        The nuisance parameter is recomputed for each hypothesis with a closed-form
        estimator. If the estimator is the exact maximizer of the density for that
        hypothesis, the profile likelihood is at least as large as the likelihood for
        any fixed nuisance value.

        Args:
            nuisance_estimator (Optional[families.NuisanceEstimator], optional):
                estimator to use, defaults to None (use the estimator the surface was
                created with, or the default estimator of the family)

        Raises:
            MissingParameterError: when no estimator is available
            DomainError: when a grid point or an estimated nuisance value is outside
                the family support

        Returns:
            LikelihoodResults: profile likelihood per grid point, in grid order
        """
        estimator = self._estimator(nuisance_estimator)
        log.info(
            f"evaluating {self.family.name} profile likelihood of "
            f"{self.observations.size} observation(s) at {self.grid.size} grid "
            "point(s)"
        )
        likelihoods = np.zeros(self.grid.size)
        log_likelihoods = np.zeros(self.grid.size)
        nuisance_values = np.zeros(self.grid.size)
        for i_par, hypothesis in enumerate(self.grid):
            nuisance = float(estimator(self.observations, float(hypothesis)))
            nuisance_values[i_par] = nuisance
            likelihoods[i_par], log_likelihoods[i_par] = self._evaluate_point(
                float(hypothesis), nuisance
            )
        return self._collect(likelihoods, log_likelihoods, nuisance_values, True)

    def results(self) -> LikelihoodResults:
        """Returns the likelihood surface defined at construction.

        This is the profile likelihood if the surface was created with a nuisance
        estimator, and the fixed-nuisance likelihood otherwise. It is evaluated once
        and reused by all further operations.

        Returns:
            LikelihoodResults: likelihood per grid point
        """
        if self._results is None:
            if self.nuisance_estimator is not None:
                self._results = self.evaluate_profiled()
            else:
                self._results = self.evaluate()
        return self._results

    def _lookup(self, hypothesis: float) -> Tuple[float, float]:
        """Returns likelihood and log-likelihood, evaluating off-grid values."""
        results = self.results()
        matches = np.flatnonzero(results.parameter_values == hypothesis)
        if matches.size > 0:
            return (
                float(results.likelihoods[matches[0]]),
                float(results.log_likelihoods[matches[0]]),
            )
        log.debug(f"hypothesis {hypothesis} is not on the grid, evaluating it")
        if self.nuisance_estimator is not None:
            nuisance = float(self.nuisance_estimator(self.observations, hypothesis))
        else:
            nuisance = self._fixed_nuisance(None)
        return self._evaluate_point(float(hypothesis), nuisance)

    def _reference(self, reference: Optional[float]) -> Tuple[float, float, float]:
        if reference is None:
            mle = self.max_likelihood_estimate()
            return mle.value, mle.likelihood, mle.log_likelihood
        return (float(reference),) + self._lookup(float(reference))

    def max_likelihood_estimate(self) -> MaximumLikelihoodResults:
        """Returns the grid point with the highest likelihood.

        Grid points are compared by log-likelihood, which stays meaningful when the
        likelihood underflows. Log-likelihoods equal within a relative tolerance of
        1e-12 count as ties, they are resolved by taking the first grid point and are
        recorded in the result.

        Raises:
            ZeroReferenceError: when the likelihood is zero at every grid point

        Returns:
            MaximumLikelihoodResults: the maximum-likelihood estimate on the grid
        """
        results = self.results()
        max_log_likelihood = np.max(results.log_likelihoods)
        if max_log_likelihood == -np.inf:
            raise ZeroReferenceError("likelihood is zero at every grid point")

        # ties up to rounding in the sum of log densities
        tied_indices = np.flatnonzero(
            np.isclose(
                results.log_likelihoods, max_log_likelihood, rtol=1e-12, atol=0
            )
        )
        index = int(tied_indices[0])
        value = float(results.parameter_values[index])
        tied = tied_indices.size > 1
        if tied:
            log.warning(
                f"maximum likelihood reached at {tied_indices.size} grid points, "
                f"using the first one at {value}"
            )
        nuisance = (
            float(results.nuisance_values[index])
            if results.nuisance_values is not None
            else None
        )
        return MaximumLikelihoodResults(
            value,
            index,
            float(results.likelihoods[index]),
            float(results.log_likelihoods[index]),
            nuisance,
            tied,
            results.parameter_values[tied_indices],
        )

    def likelihood_ratios(self, reference: Optional[float] = None) -> RatioResults:
        """Returns the likelihood ratio of every grid point to a reference.

        Args:
            reference (Optional[float], optional): reference hypothesis, defaults to
                None (use the maximum-likelihood estimate)

        Raises:
            ZeroReferenceError: when the reference likelihood is zero, in which case
                ``log_likelihood_ratios`` should be used instead

        Returns:
            RatioResults: ratio per grid point
        """
        ref_value, ref_likelihood, ref_log_likelihood = self._reference(reference)
        if ref_likelihood == 0:
            raise ZeroReferenceError(
                f"likelihood at reference {ref_value} is zero and the ratio is "
                "undefined, use log_likelihood_ratios instead"
            )
        results = self.results()
        ratios = np.exp(results.log_likelihoods - ref_log_likelihood)
        return RatioResults(ref_value, results.parameter_values, _read_only(ratios))

    def log_likelihood_ratios(self, reference: Optional[float] = None) -> RatioResults:
        """Returns the log-likelihood ratio of every grid point to a reference.

        The ratios are differences of log-likelihoods and remain finite when the
        likelihoods themselves underflow.

        Args:
            reference (Optional[float], optional): reference hypothesis, defaults to
                None (use the maximum-likelihood estimate)

        Raises:
            ZeroReferenceError: when the reference hypothesis assigns probability zero
                to the observations (log-likelihood of -inf)

        Returns:
            RatioResults: natural log of the ratio per grid point
        """
        ref_value, _, ref_log_likelihood = self._reference(reference)
        if ref_log_likelihood == -np.inf:
            raise ZeroReferenceError(
                f"observations are impossible under reference {ref_value}"
            )
        results = self.results()
        log_ratios = results.log_likelihoods - ref_log_likelihood
        return RatioResults(
            ref_value, results.parameter_values, _read_only(log_ratios), True
        )

    def likelihood_ratio(
        self, hypothesis: float, reference: Optional[float] = None
    ) -> float:
        """Returns the likelihood ratio of a single hypothesis to a reference.

        Args:
            hypothesis (float): hypothesis in the numerator
            reference (Optional[float], optional): reference hypothesis, defaults to
                None (use the maximum-likelihood estimate)

        Raises:
            ZeroReferenceError: when the reference likelihood is zero

        Returns:
            float: likelihood ratio
        """
        ref_value, ref_likelihood, ref_log_likelihood = self._reference(reference)
        if ref_likelihood == 0:
            raise ZeroReferenceError(
                f"likelihood at reference {ref_value} is zero and the ratio is "
                "undefined, use log_likelihood_ratios instead"
            )
        _, log_likelihood = self._lookup(float(hypothesis))
        return float(np.exp(log_likelihood - ref_log_likelihood))

    def log_likelihood_ratio(
        self, hypothesis: float, reference: Optional[float] = None
    ) -> float:
        """Returns the log-likelihood ratio of a single hypothesis to a reference.

        Args:
            hypothesis (float): hypothesis in the numerator
            reference (Optional[float], optional): reference hypothesis, defaults to
                None (use the maximum-likelihood estimate)

        Raises:
            ZeroReferenceError: when the reference log-likelihood is -inf

        Returns:
            float: natural log of the likelihood ratio
        """
        ref_value, _, ref_log_likelihood = self._reference(reference)
        if ref_log_likelihood == -np.inf:
            raise ZeroReferenceError(
                f"observations are impossible under reference {ref_value}"
            )
        _, log_likelihood = self._lookup(float(hypothesis))
        return log_likelihood - ref_log_likelihood

    def likelihood_interval(self, threshold: Union[str, float]) -> IntervalResults:
        """Returns the grid points supported within a likelihood ratio threshold.

        A grid point belongs to the interval if its likelihood ratio to the
        maximum-likelihood estimate is at least ``threshold``. The comparison is done
        with log-likelihoods. Multimodal surfaces can lead to intervals that are not
        contiguous, this is reported in the result but not corrected.

        Args:
            threshold (Union[str, float]): threshold in (0, 1], or the name of a
                preset from ``THRESHOLD_PRESETS``

        Raises:
            InvalidThresholdError: when the threshold is outside (0, 1]

        Returns:
            IntervalResults: the likelihood interval
        """
        threshold_value = resolve_threshold(threshold)
        mle = self.max_likelihood_estimate()
        results = self.results()
        log_ratios = results.log_likelihoods - mle.log_likelihood
        mask = log_ratios >= np.log(threshold_value)

        members = results.parameter_values[mask]
        segments = contiguous_segments(results.parameter_values, mask)
        contiguous = len(segments) == 1
        label = threshold_label(threshold_value)
        if not contiguous:
            log.warning(
                f"{label} likelihood interval is not contiguous, found "
                f"{len(segments)} separate ranges"
            )
        if mask[0] or mask[-1]:
            log.warning(
                f"{label} likelihood interval reaches the edge of the grid and may "
                "extend beyond it"
            )
        log.info(
            f"{label} likelihood interval: [{members[0]:.4f}, {members[-1]:.4f}]"
        )
        return IntervalResults(
            threshold_value,
            members,
            float(members[0]),
            float(members[-1]),
            contiguous,
            segments,
        )


def print_results(
    mle_results: MaximumLikelihoodResults,
    interval_results: Sequence[IntervalResults] = (),
) -> None:
    """Prints the maximum-likelihood estimate and likelihood intervals.

    Args:
        mle_results (MaximumLikelihoodResults): maximum-likelihood estimate
        interval_results (Sequence[IntervalResults], optional): likelihood intervals
            to print, defaults to none
    """
    log.info(
        f"maximum-likelihood estimate: {mle_results.value:.4f} (log-likelihood "
        f"{mle_results.log_likelihood:.4f})"
    )
    if mle_results.nuisance is not None:
        log.info(f"nuisance parameter at estimate: {mle_results.nuisance:.4f}")
    if mle_results.tied:
        log.info(f"tied grid points: {mle_results.tied_values}")
    for interval in interval_results:
        segments = ", ".join(
            f"[{low:.4f}, {high:.4f}]" for low, high in interval.segments
        )
        label = threshold_label(interval.threshold)
        log.info(f"{label:>6} likelihood interval: {segments}")


