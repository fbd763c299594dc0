from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from math import isfinite
from typing import TYPE_CHECKING, Any

from scipy import (
    integrate as _sp_integrate,
    optimize as _sp_optimize,
)

from pysatl_numeric.distributions.computation import FittedComputationMethod
from pysatl_numeric.types import CharacteristicName

if TYPE_CHECKING:
    from collections.abc import Callable

    from pysatl_numeric.distributions.discrete import ContinuousDiscreteDistribution
    from pysatl_numeric.types import GenericCharacteristicName, ScalarFunc

    type Fitter = Callable[..., FittedComputationMethod[float, float]]


def _resolve(
    distribution: ContinuousDiscreteDistribution, name: GenericCharacteristicName
) -> ScalarFunc:
    """
    Resolve a scalar characteristic from the distribution.

    Parameters
    ----------
    distribution : ContinuousDiscreteDistribution
        Source distribution.
    name : str
        Characteristic name to resolve (e.g., ``"cdf"``).

    Returns
    -------
    Callable[[float], float]
        Scalar callable for the requested characteristic.
    """
    fn = distribution.query_method(name)

    def _wrap(x: float) -> float:
        return float(fn(x))

    return _wrap


def _ppf_brentq_from_cdf(
    cdf: ScalarFunc,
    *,
    x0: float = 0.0,
    init_step: float = 1.0,
    expand_factor: float = 2.0,
    max_expand: int = 60,
    x_tol: float = 1e-12,
    max_iter: int = 200,
) -> ScalarFunc:
    """
    Build a scalar ``ppf`` from a scalar ``cdf`` using bracket expansion
    followed by Brent's method.

    Parameters
    ----------
    cdf : Callable[[float], float]
        Monotone CDF in ``[-inf, +inf] -> [0, 1]``.
    x0 : float, default 0.0
        Initial bracket center.
    init_step : float, default 1.0
        Initial half-width for the bracket.
    expand_factor : float, default 2.0
        Multiplicative factor for exponential bracket growth.
    max_expand : int, default 60
        Maximum expansions while searching for a valid bracket.
    x_tol : float, default 1e-12
        Absolute tolerance in ``x`` for the root search.
    max_iter : int, default 200
        Maximum iterations of the root search.

    Returns
    -------
    Callable[[float], float]
        Scalar ``ppf`` such that ``cdf(ppf(q)) ≈ q``.

    Notes
    -----
    Extreme tail queries are clamped: ``q <= 0`` maps to ``-inf``,
    ``q >= 1`` maps to ``+inf``.
    """

    def _expand_bracket(q: float) -> tuple[float, float]:
        step = init_step
        L = x0 - step
        R = x0 + step
        FL = cdf(L)
        FR = cdf(R)

        for _ in range(max_expand):
            if FL < q <= FR:
                return L, R
            if q <= FL:
                step *= expand_factor
                L -= step
                FL = cdf(L)
            if q > FR:
                step *= expand_factor
                R += step
                FR = cdf(R)

        raise RuntimeError(f"Could not bracket quantile {q} after {max_expand} expansions.")

    def _ppf(q: float) -> float:
        if q <= 0.0:
            return float("-inf")
        if q >= 1.0:
            return float("inf")

        L, R = _expand_bracket(q)
        return float(
            _sp_optimize.brentq(lambda x: cdf(x) - q, L, R, xtol=x_tol, maxiter=max_iter)
        )

    return _ppf


def fit_cdf_to_ppf(
    distribution: ContinuousDiscreteDistribution, **options: Any
) -> FittedComputationMethod[float, float]:
    """
    Fit ``ppf`` by numerically inverting ``cdf``.

    The bracket search starts from the finite lower bound of the support if
    there is one, from 0 otherwise.
    """
    cdf = _resolve(distribution, CharacteristicName.CDF)
    left = distribution.support.left
    options.setdefault("x0", left if isfinite(left) else 0.0)
    return FittedComputationMethod(
        target=CharacteristicName.PPF,
        sources=[CharacteristicName.CDF],
        func=_ppf_brentq_from_cdf(cdf, **options),
    )


def fit_ppf_to_partial_expectation(
    distribution: ContinuousDiscreteDistribution, **options: Any
) -> FittedComputationMethod[float, float]:
    """
    Fit the partial expectation ``E(x) = ∫_{-inf}^{x} t f(t) dt``.

    Uses the change of variables ``t = ppf(u)``:
    ``E(x) = ∫_0^{cdf(x)} ppf(u) du``, integrated with adaptive quadrature.
    """
    cdf = _resolve(distribution, CharacteristicName.CDF)
    ppf = _resolve(distribution, CharacteristicName.PPF)
    limit = int(options.get("limit", 200))

    def _partial_expectation(x: float) -> float:
        p = cdf(x)
        if p <= 0.0:
            return 0.0
        value, _abserr = _sp_integrate.quad(ppf, 0.0, p, limit=limit)
        return float(value)

    return FittedComputationMethod(
        target=CharacteristicName.PARTIAL_EXPECTATION,
        sources=[CharacteristicName.CDF, CharacteristicName.PPF],
        func=_partial_expectation,
    )


FITTERS: dict[GenericCharacteristicName, Fitter] = {
    CharacteristicName.PPF: fit_cdf_to_ppf,
    CharacteristicName.PARTIAL_EXPECTATION: fit_ppf_to_partial_expectation,
}
"""Numerical fallbacks by target characteristic."""
