"""Univariate and bivariate standard normal distribution functions."""

import math
import sys

import numpy as np
from scipy import integrate
from scipy.stats import norm

# Machine epsilon used to nudge values away from exact boundaries.
EPSILON = sys.float_info.epsilon

# Upper guard for arguments of the inverse CDF, which is singular at 1.
ONE_GUARD = 1.0 - 1.0e-12


def phi(x: float) -> float:
    """Standard normal cumulative distribution function."""
    return float(norm.cdf(x))


def inverse_phi(p: float) -> float:
    """Inverse of the standard normal CDF.

    Args:
        p: Probability in [0, 1]

    Returns:
        The quantile; -inf at 0 and +inf at 1
    """
    if not 0 <= p <= 1:
        raise ValueError(f"Probability must be between 0 and 1, got {p}")
    return float(norm.ppf(p))


class BivariateCumulativeNormal:
    """Bivariate standard normal CDF with a fixed correlation.

    Evaluates P(X <= x, Y <= y) for standard normals X, Y with
    Corr(X, Y) = rho, using

        P(X <= x, Y <= y) = ∫_{-∞}^{x} φ(u) Φ((y - rho u) / sqrt(1 - rho²)) du

    The degenerate correlations ±1 and the independent case are
    evaluated in closed form.
    """

    def __init__(self, rho: float):
        """Initialize the evaluator.

        Args:
            rho: Correlation between the two variables, in [-1, 1]
        """
        if not -1 <= rho <= 1:
            raise ValueError(f"Correlation must be between -1 and 1, got {rho}")
        self._rho = float(rho)
        self._sqrt_one_minus_rho2 = math.sqrt(1.0 - self._rho ** 2)

    @property
    def rho(self) -> float:
        return self._rho

    def __call__(self, x: float, y: float) -> float:
        if x == -np.inf or y == -np.inf:
            return 0.0
        if x == np.inf:
            return phi(y)
        if y == np.inf:
            return phi(x)

        rho = self._rho
        if rho == 0.0:
            return phi(x) * phi(y)
        if rho == 1.0:
            return phi(min(x, y))
        if rho == -1.0:
            return max(0.0, phi(x) + phi(y) - 1.0)

        # integrate over the smaller argument
        if y < x:
            x, y = y, x

        s = self._sqrt_one_minus_rho2

        def integrand(u):
            return norm.pdf(u) * norm.cdf((y - rho * u) / s)

        # The conditional CDF steps at u = y / rho as |rho| -> 1; split there.
        pieces = [-np.inf, x]
        step = y / rho
        if step < x:
            pieces = [-np.inf, step, x]

        value = 0.0
        for lower, upper in zip(pieces[:-1], pieces[1:]):
            part, _ = integrate.quad(integrand, lower, upper,
                                     epsabs=1e-13, epsrel=1e-10, limit=200)
            value += part
        return float(min(max(value, 0.0), phi(x)))

    def __repr__(self) -> str:
        return f"BivariateCumulativeNormal(rho={self._rho:.6f})"


def biphi(x: float, y: float, rho: float) -> float:
    """P(X <= x, Y <= y) for standard normals with correlation rho."""
    return BivariateCumulativeNormal(rho)(x, y)
