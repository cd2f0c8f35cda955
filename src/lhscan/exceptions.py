"""Exceptions raised when a likelihood cannot be evaluated as requested."""


class LikelihoodError(Exception):
    """Base class for all errors raised by lhscan."""


class EmptyInputError(LikelihoodError, ValueError):
    """Raised when the observations or the hypothesis grid are empty."""


class InvalidGridError(LikelihoodError, ValueError):
    """Raised when a hypothesis grid is not finite and strictly increasing."""


class DomainError(LikelihoodError, ValueError):
    """Raised when an observation or parameter is outside the family support."""


class MissingParameterError(LikelihoodError, ValueError):
    """Raised when a nuisance parameter is required but neither given nor profiled."""


class ZeroReferenceError(LikelihoodError, ArithmeticError):
    """Raised when the reference likelihood is zero and a ratio is undefined.

    For large observation sets the likelihood underflows to zero even for well
    supported hypotheses, use log-likelihood ratios in that case.
    """


class InvalidThresholdError(LikelihoodError, ValueError):
    """Raised when a likelihood interval threshold is not in (0, 1]."""
