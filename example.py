import lhscan


if __name__ == "__main__":
    # set up customized log formatting
    lhscan.set_logging()

    # import example config file
    config = lhscan.configuration.load("config_example.yml")
    lhscan.configuration.print_overview(config)

    # likelihood over the hypothesis grid
    surface = lhscan.configuration.build_surface(config)
    likelihood_results = surface.results()

    # maximum-likelihood estimate and likelihood intervals
    mle_results = surface.max_likelihood_estimate()
    interval_results = [
        surface.likelihood_interval(threshold)
        for threshold in lhscan.configuration.thresholds(config)
    ]
    lhscan.surface.print_results(mle_results, interval_results)

    # likelihood ratios to the reference hypothesis
    ratio_results = surface.likelihood_ratios(lhscan.configuration.reference(config))
    lhscan.tabulate.surface(likelihood_results, ratio_results=ratio_results)

    # visualize likelihood and likelihood ratios
    lhscan.visualize.likelihood(likelihood_results, mle_results=mle_results)
    lhscan.visualize.likelihood(likelihood_results, log_scale=True)
    # likelihood intervals are defined relative to the maximum-likelihood estimate
    lhscan.visualize.ratios(
        surface.likelihood_ratios(),
        thresholds=list(lhscan.surface.THRESHOLD_PRESETS),
        mle_results=mle_results,
    )
    lhscan.visualize.ratios(ratio_results, mle_results=mle_results)

    # normal observations with a profiled standard deviation
    heights = lhscan.surface.LikelihoodSurface(
        [165.2, 171.8, 168.4, 180.1, 174.6, 169.9, 177.3, 172.0],
        [160 + 0.5 * i for i in range(41)],
        lhscan.families.NormalFamily(),
        nuisance_estimator=lhscan.families.sd_about_mean,
    )
    lhscan.surface.print_results(
        heights.max_likelihood_estimate(), [heights.likelihood_interval("strong")]
    )
