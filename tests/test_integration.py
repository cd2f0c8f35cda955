import logging

import numpy as np
import pytest

import lhscan


def test_integration(tmp_path, caplog):
    """The purpose of this integration test is to check whether the
    steps run without error and whether the results are as expected.
    """
    lhscan_config = lhscan.configuration.load("config_example.yml")
    caplog.set_level(logging.DEBUG)

    surface = lhscan.configuration.build_surface(lhscan_config)
    likelihood_results = surface.results()
    assert likelihood_results.parameter_values.size == 1001
    assert likelihood_results.profiled is False

    mle_results = surface.max_likelihood_estimate()
    assert mle_results.value == pytest.approx(0.833)
    assert mle_results.tied is False

    reference = lhscan.configuration.reference(lhscan_config)
    ratio_results = surface.likelihood_ratios(reference)
    assert ratio_results.reference == 0.5
    assert surface.likelihood_ratio(0.8, reference) == pytest.approx(4.194304)

    interval_results = [
        surface.likelihood_interval(threshold)
        for threshold in lhscan.configuration.thresholds(lhscan_config)
    ]
    assert [interval.threshold for interval in interval_results] == [1 / 8, 1 / 32]
    for interval in interval_results:
        assert interval.contiguous
        assert interval.lower < mle_results.value < interval.upper
    # the stronger threshold gives the wider interval
    assert interval_results[1].lower < interval_results[0].lower
    lhscan.surface.print_results(mle_results, interval_results)

    table = lhscan.tabulate.surface(
        likelihood_results,
        ratio_results=ratio_results,
        table_folder=tmp_path,
        table_label="coin-flips",
    )
    assert len(table) == 1001
    assert (tmp_path / "likelihood_coin-flips.txt").is_file()

    lhscan.visualize.likelihood(
        likelihood_results,
        mle_results=mle_results,
        label="coin flips",
        figure_folder=tmp_path,
    )
    lhscan.visualize.ratios(
        ratio_results,
        thresholds=lhscan_config["Thresholds"],
        label="coin flips",
        figure_folder=tmp_path,
    )
    assert (tmp_path / "likelihood_coin-flips.pdf").is_file()
    assert (tmp_path / "ratio_coin-flips.pdf").is_file()


def test_integration_normal(example_config_normal):
    surface = lhscan.configuration.build_surface(example_config_normal)
    heights = surface.observations

    profiled = surface.results()
    assert profiled.profiled is True
    # profile likelihood is never below the likelihood at a fixed standard deviation
    for sd in [0.3, 0.5, 1.0]:
        fixed = surface.evaluate(fixed_nuisance=sd)
        assert np.all(profiled.log_likelihoods >= fixed.log_likelihoods - 1e-12)

    mle_results = surface.max_likelihood_estimate()
    assert mle_results.value == pytest.approx(np.mean(heights), abs=0.05)
    assert mle_results.nuisance == pytest.approx(
        np.sqrt(np.mean((heights - mle_results.value) ** 2))
    )

    # reference from the config
    log_ratio_results = surface.log_likelihood_ratios(
        lhscan.configuration.reference(example_config_normal)
    )
    assert log_ratio_results.reference == 5.0
    assert log_ratio_results.ratios[10] == pytest.approx(0.0)
