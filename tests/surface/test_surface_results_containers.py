import numpy as np

from lhscan import surface


def test_LikelihoodResults():
    parameter_values = np.asarray([0.5, 0.8])
    likelihoods = np.asarray([0.015625, 0.065536])
    log_likelihoods = np.log(likelihoods)
    likelihood_results = surface.LikelihoodResults(
        parameter_values, likelihoods, log_likelihoods
    )
    assert np.allclose(likelihood_results.parameter_values, parameter_values)
    assert np.allclose(likelihood_results.likelihoods, likelihoods)
    assert np.allclose(likelihood_results.log_likelihoods, log_likelihoods)
    assert likelihood_results.nuisance_values is None
    assert likelihood_results.profiled is False

    points = likelihood_results.points()
    assert points == [
        surface.LikelihoodPoint(0.5, 0.015625, log_likelihoods[0], None),
        surface.LikelihoodPoint(0.8, 0.065536, log_likelihoods[1], None),
    ]

    # with nuisance parameter
    likelihood_results = surface.LikelihoodResults(
        parameter_values, likelihoods, log_likelihoods, np.asarray([1.0, 1.5]), True
    )
    assert likelihood_results.profiled is True
    points = likelihood_results.points()
    assert [point.nuisance for point in points] == [1.0, 1.5]
    assert all(isinstance(point.value, float) for point in points)


def test_LikelihoodPoint():
    point = surface.LikelihoodPoint(1.0, 0.5, -0.6931, 2.0)
    assert point.value == 1.0
    assert point.likelihood == 0.5
    assert point.log_likelihood == -0.6931
    assert point.nuisance == 2.0


def test_MaximumLikelihoodResults():
    tied_values = np.asarray([0.8])
    mle_results = surface.MaximumLikelihoodResults(
        0.8, 1, 0.065536, -2.725, None, False, tied_values
    )
    assert mle_results.value == 0.8
    assert mle_results.index == 1
    assert mle_results.likelihood == 0.065536
    assert mle_results.log_likelihood == -2.725
    assert mle_results.nuisance is None
    assert mle_results.tied is False
    assert np.allclose(mle_results.tied_values, tied_values)


def test_RatioResults():
    parameter_values = np.asarray([0.5, 0.8])
    ratios = np.asarray([1.0, 4.194304])
    ratio_results = surface.RatioResults(0.5, parameter_values, ratios)
    assert ratio_results.reference == 0.5
    assert np.allclose(ratio_results.parameter_values, parameter_values)
    assert np.allclose(ratio_results.ratios, ratios)
    assert ratio_results.log_scale is False


def test_IntervalResults():
    parameter_values = np.asarray([0.7, 0.8, 0.9])
    interval_results = surface.IntervalResults(
        0.125, parameter_values, 0.7, 0.9, True, [(0.7, 0.9)]
    )
    assert interval_results.threshold == 0.125
    assert np.allclose(interval_results.parameter_values, parameter_values)
    assert interval_results.lower == 0.7
    assert interval_results.upper == 0.9
    assert interval_results.contiguous is True
    assert interval_results.segments == [(0.7, 0.9)]
