"""Provides utilities to handle the lhscan configuration."""

import functools
import json
import logging
import pathlib
import pkgutil
from typing import Any, Dict, List, Optional, Tuple, Union

import jsonschema
import numpy as np
import yaml

from lhscan import families
from lhscan import observations
from lhscan.surface import LikelihoodSurface
from lhscan.surface.utils import resolve_threshold


log = logging.getLogger(__name__)


def load(file_path_string: Union[str, pathlib.Path]) -> Dict[str, Any]:
    """Loads, validates, and returns a config file from the provided path.

    Args:
        file_path_string (Union[str, pathlib.Path]): path to config file

    Returns:
        Dict[str, Any]: lhscan configuration
    """
    file_path = pathlib.Path(file_path_string)
    log.info(f"opening config file {file_path}")
    config = yaml.safe_load(file_path.read_text())
    validate(config)
    return config


def validate(config: Dict[str, Any]) -> bool:
    """Returns True if the config file is validated, otherwise raises exceptions.

    Checks that the config satisfies the json schema, and performs additional checks to
    validate the config further.

    Args:
        config (Dict[str, Any]): lhscan configuration

    Raises:
        ValueError: when the grid range is empty, when the family has no nuisance
            parameter but one is configured, or when a threshold is not valid

    Returns:
        bool: whether the validation was successful
    """
    # load json schema for config and validate against it
    schema_text = pkgutil.get_data(__name__, "schemas/config.json")
    if schema_text is None:
        raise FileNotFoundError("could not load config schema")
    config_schema = json.loads(schema_text)
    jsonschema.validate(instance=config, schema=config_schema)

    # check that a grid range goes upwards
    grid = config["Grid"]
    if "Values" not in grid and grid["Stop"] <= grid["Start"]:
        raise ValueError(
            f"grid Stop must be larger than Start: {grid['Start']}, {grid['Stop']}"
        )

    # check that a nuisance parameter is only configured for families that have one
    family_name = config["General"]["Family"]
    if "Nuisance" in config and not families.FAMILIES[family_name].requires_nuisance:
        raise ValueError(f"{family_name} family has no nuisance parameter")

    # check that thresholds are valid, raises InvalidThresholdError (a ValueError)
    for threshold in config.get("Thresholds", []):
        resolve_threshold(threshold)

    # if no issues are found
    return True


def print_overview(config: Dict[str, Any]) -> None:
    """Prints a compact summary of a config file.

    Args:
        config (Dict[str, Any]): lhscan configuration
    """
    log.info("the config contains:")
    log.info(f"  family: {config['General']['Family']}")
    if "Values" in config["Observations"]:
        log.info(f"  {len(config['Observations']['Values'])} observation(s)")
    else:
        log.info(f"  observations from {config['Observations']['File']}")
    log.info(f"  {len(grid_values(config))} grid point(s)")
    if "Nuisance" in config:
        if config["Nuisance"].get("Profile", False):
            log.info("  profiled nuisance parameter")
        else:
            log.info(f"  nuisance parameter fixed at {config['Nuisance']['Value']}")
    if "Thresholds" in config:
        log.info(f"  {len(config['Thresholds'])} likelihood interval threshold(s)")


def family(config: Dict[str, Any]) -> families.Family:
    """Returns the density family of a configuration.

    Args:
        config (Dict[str, Any]): lhscan configuration

    Returns:
        families.Family: the density family
    """
    return families.get(config["General"]["Family"])


def observation_values(config: Dict[str, Any]) -> np.ndarray:
    """Returns the observations of a configuration.

    Args:
        config (Dict[str, Any]): lhscan configuration

    Returns:
        np.ndarray: observations, inline or read from file
    """
    settings = config["Observations"]
    if "Values" in settings:
        return observations.as_observations(settings["Values"])
    return observations.load(
        settings["File"],
        column=settings.get("Column"),
        delimiter=settings.get("Delimiter", ","),
    )


def grid_values(config: Dict[str, Any]) -> np.ndarray:
    """Returns the hypothesis grid of a configuration.

    A range is turned into evenly spaced values including both ends. If ``Step`` does
    not divide the range, the spacing is adjusted to the nearest number of steps.

    Args:
        config (Dict[str, Any]): lhscan configuration

    Returns:
        np.ndarray: hypothesis grid
    """
    settings = config["Grid"]
    if "Values" in settings:
        return np.asarray(settings["Values"], dtype=float)

    start, stop = settings["Start"], settings["Stop"]
    if "Steps" in settings:
        n_steps = settings["Steps"]
    else:
        n_steps = int(round((stop - start) / settings["Step"])) + 1
        spacing = (stop - start) / max(n_steps - 1, 1)
        if not np.isclose(spacing, settings["Step"]):
            log.warning(
                f"grid step {settings['Step']} does not divide ({start}, {stop}), "
                f"using {spacing:.4g}"
            )
    return np.linspace(start, stop, n_steps)


def nuisance(
    config: Dict[str, Any]
) -> Tuple[Optional[float], Optional[families.NuisanceEstimator]]:
    """Returns the fixed nuisance value or the nuisance estimator of a configuration.

    At most one of both is not None. ``DDOF`` is passed to the estimator of the
    family when profiling.

    Args:
        config (Dict[str, Any]): lhscan configuration

    Raises:
        ValueError: when profiling is requested for a family without estimator

    Returns:
        Tuple[Optional[float], Optional[families.NuisanceEstimator]]: fixed value and
        estimator
    """
    settings = config.get("Nuisance", {})
    if settings.get("Profile", False):
        estimator = family(config).nuisance_estimator
        if estimator is None:
            raise ValueError(
                f"{config['General']['Family']} family has no nuisance estimator"
            )
        if "DDOF" in settings:
            estimator = functools.partial(estimator, ddof=settings["DDOF"])
        return None, estimator
    return settings.get("Value"), None


def reference(config: Dict[str, Any]) -> Optional[float]:
    """Returns the reference hypothesis for likelihood ratios, if configured.

    Args:
        config (Dict[str, Any]): lhscan configuration

    Returns:
        Optional[float]: reference hypothesis, None for the maximum-likelihood estimate
    """
    return config.get("Reference")


def thresholds(config: Dict[str, Any]) -> List[float]:
    """Returns the likelihood interval thresholds of a configuration.

    Args:
        config (Dict[str, Any]): lhscan configuration

    Returns:
        List[float]: thresholds, with preset names resolved
    """
    return [resolve_threshold(threshold) for threshold in config.get("Thresholds", [])]


def build_surface(config: Dict[str, Any]) -> LikelihoodSurface:
    """Builds the likelihood surface described by a configuration.

    Args:
        config (Dict[str, Any]): lhscan configuration

    Returns:
        LikelihoodSurface: likelihood surface
    """
    fixed_nuisance, estimator = nuisance(config)
    return LikelihoodSurface(
        observation_values(config),
        grid_values(config),
        family(config),
        nuisance=fixed_nuisance,
        nuisance_estimator=estimator,
    )
