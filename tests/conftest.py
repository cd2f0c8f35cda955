import csv
import logging.config

import numpy as np
import pytest


def pytest_sessionstart():
    # suppress verbose DEBUG level output from matplotlib when tests fail
    logging.config.dictConfig(
        {
            "loggers": {"matplotlib": {"level": "INFO"}},
            "disable_existing_loggers": False,
            "version": 1,
        }
    )


class Utils:
    @staticmethod
    def write_csv(fname, header, rows, delimiter=","):
        with open(fname, "w", newline="") as f:
            writer = csv.writer(f, delimiter=delimiter)
            writer.writerow(header)
            writer.writerows(rows)


@pytest.fixture
def utils():
    return Utils


@pytest.fixture
def coin_flips():
    # 5 successes in 6 trials
    return np.asarray([1, 1, 1, 1, 1, 0])


@pytest.fixture
def heights():
    return np.asarray([4.8, 5.1, 5.6, 4.3, 5.0, 5.9, 4.7])


@pytest.fixture
def example_config():
    config = {
        "General": {"Name": "coin flips", "Family": "bernoulli"},
        "Observations": {"Values": [1, 1, 1, 1, 1, 0]},
        "Grid": {"Values": [0.5, 0.8, 0.9]},
        "Thresholds": ["fairly_strong", 0.5],
    }
    return config


@pytest.fixture
def example_config_normal():
    config = {
        "General": {"Name": "heights", "Family": "normal"},
        "Observations": {"Values": [4.8, 5.1, 5.6, 4.3, 5.0, 5.9, 4.7]},
        "Grid": {"Start": 4.0, "Stop": 6.0, "Steps": 21},
        "Nuisance": {"Profile": True, "DDOF": 0},
        "Reference": 5.0,
    }
    return config
