"""The lhscan library."""

import logging
from typing import List

import lhscan.configuration as configuration  # noqa: F401
import lhscan.exceptions as exceptions  # noqa: F401
import lhscan.families as families  # noqa: F401
import lhscan.observations as observations  # noqa: F401
import lhscan.surface as surface  # noqa: F401
import lhscan.tabulate as tabulate  # noqa: F401
import lhscan.visualize as visualize  # noqa: F401


__all__ = [
    "__version__",
    "set_logging",
    "configuration",
    "exceptions",
    "families",
    "observations",
    "surface",
    "tabulate",
    "visualize",
]


def __dir__() -> List[str]:
    return __all__


__version__ = "0.1.0"


def set_logging() -> None:
    """Sets up customized and verbose logging output.

    Logging can be alternatively customized with the Python ``logging`` module directly.
    """
    logging.basicConfig(format="%(levelname)s - %(name)s - %(message)s")
    logging.getLogger("lhscan").setLevel(logging.DEBUG)
    logging.getLogger("matplotlib").setLevel(logging.WARNING)
