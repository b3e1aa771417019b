"""
Data-driven model discovery with sparse regression (SINDy).

Candidate bases, sparse regression and numerical differentiation all come
from :mod:`pysindy`; this module assembles them, re-simulates the
discovered model and compares it against the data it was fit to.
"""
from logging import getLogger
from typing import Optional

import numpy as np
import pysindy as ps
from sklearn.base import BaseEstimator
from sklearn.metrics import mean_squared_error
from sklearn.metrics import r2_score
from sklearn.utils.validation import check_is_fitted

from .problems import DEFAULT_INTEGRATOR_KWS
from .utils import validate_input

logger = getLogger(__name__)

OPTIMIZERS = ("stlsq", "sr3")


def build_basis(degree=2, n_frequencies=0, include_bias=True):
    """Candidate basis of monomials, optionally with sines and cosines.

    Parameters
    ----------
    degree: int, optional (default 2)
        Maximal total degree of the monomials.

    n_frequencies: int, optional (default 0)
        Number of sine/cosine pairs ``sin(k x_i), cos(k x_i)``,
        ``k = 1..n_frequencies``. Zero gives a purely polynomial basis.

    include_bias: bool, optional (default True)
        Whether to include the constant term.

    Returns
    -------
    library: pysindy feature library
    """
    library = ps.PolynomialLibrary(degree=degree, include_bias=include_bias)
    if n_frequencies > 0:
        library = library + ps.FourierLibrary(n_frequencies=n_frequencies)
    return library


class ModelDiscovery(BaseEstimator):
    """
    Fit a sparse symbolic vector field to trajectory data.

    Parameters
    ----------
    threshold: float, optional (default 0.1)
        Coefficients smaller than this are pruned by the sparse regression.

    alpha: float, optional (default 0.05)
        Ridge regularization strength of STLSQ. Ignored by SR3.

    degree: int, optional (default 2)
        Polynomial degree of the default basis.

    n_frequencies: int, optional (default 0)
        Number of trigonometric frequencies in the default basis.

    basis: pysindy feature library, optional
        Overrides the basis built from ``degree`` and ``n_frequencies``.

    optimizer: string, optional (default ``stlsq``)
        ``stlsq`` (sequentially thresholded least squares) or ``sr3``.

    differentiation_method: pysindy differentiation object, optional
        Used when derivatives are not supplied to :meth:`fit`.
        Default is :class:`pysindy.FiniteDifference`.

    feature_names: list of string, optional
        Names of the state variables, e.g. ``["x", "y"]``.

    Attributes
    ----------
    model_: pysindy.SINDy
        The fitted SINDy model.
    """

    def __init__(
        self,
        threshold: float = 0.1,
        alpha: float = 0.05,
        degree: int = 2,
        n_frequencies: int = 0,
        basis=None,
        optimizer: str = "stlsq",
        differentiation_method=None,
        feature_names: Optional[list[str]] = None,
    ):
        if threshold < 0:
            raise ValueError("threshold cannot be negative")
        if optimizer not in OPTIMIZERS:
            raise ValueError(f"optimizer must be one of {OPTIMIZERS}")
        self.threshold = threshold
        self.alpha = alpha
        self.degree = degree
        self.n_frequencies = n_frequencies
        self.basis = basis
        self.optimizer = optimizer
        self.differentiation_method = differentiation_method
        self.feature_names = feature_names

    def _make_optimizer(self):
        if self.optimizer == "sr3":
            # L0 penalty whose hard threshold is sqrt(2 * lam * nu), with nu = 1
            lam = self.threshold**2 / 2
            return ps.SR3(reg_weight_lam=lam, regularizer="L0", relax_coeff_nu=1.0)
        return ps.STLSQ(threshold=self.threshold, alpha=self.alpha)

    def fit(self, x, t, x_dot=None):
        """
        Fit the model.

        Parameters
        ----------
        x: numpy array, shape (n_samples, n_states)
            Trajectory data.

        t: float or numpy array of shape (n_samples,)
            Time step or sample times.

        x_dot: numpy array, shape (n_samples, n_states), optional
            Ideal (exactly known) derivatives. If None, derivatives are
            estimated with ``differentiation_method``.

        Returns
        -------
        self: a fitted :class:`ModelDiscovery` instance
        """
        x = np.asarray(x, dtype=float)
        x = validate_input(x, None if np.isscalar(t) else t)
        basis = self.basis
        if basis is None:
            basis = build_basis(self.degree, self.n_frequencies)
        differentiation_method = self.differentiation_method
        if differentiation_method is None:
            differentiation_method = ps.FiniteDifference()
        self.model_ = ps.SINDy(
            optimizer=self._make_optimizer(),
            feature_library=basis,
            differentiation_method=differentiation_method,
        )
        self.model_.fit(x, t=t, x_dot=x_dot, feature_names=self.feature_names)
        self.n_states_ = x.shape[1]
        logger.info(
            "Discovered model with %d active terms out of %d",
            self.complexity,
            self.coefficients().size,
        )
        return self

    def equations(self, precision=3):
        check_is_fitted(self, "model_")
        return self.model_.equations(precision=precision)

    def print(self, precision=3):
        check_is_fitted(self, "model_")
        self.model_.print(precision=precision)

    def coefficients(self):
        check_is_fitted(self, "model_")
        return self.model_.coefficients()

    def get_feature_names(self):
        check_is_fitted(self, "model_")
        return self.model_.get_feature_names()

    @property
    def complexity(self):
        """Number of active basis terms across all equations."""
        return int(np.count_nonzero(self.coefficients()))

    def predict(self, x):
        """Derivatives predicted by the discovered model."""
        check_is_fitted(self, "model_")
        return self.model_.predict(x)

    def score(self, x, t, x_dot=None):
        """R^2 of the predicted derivatives."""
        check_is_fitted(self, "model_")
        return self.model_.score(x, t=t, x_dot=x_dot)

    def vector_field(self):
        """The discovered model as an out-of-place vector field ``f(t, x)``."""
        check_is_fitted(self, "model_")

        def f(t, x):
            return self.model_.predict(np.asarray(x)[np.newaxis, :])[0]

        return f

    def simulate(self, x0, t, integrator_kws=None):
        """Re-simulate the discovered model from ``x0`` on the times ``t``.

        The result is deterministic for fixed coefficients. If the
        integrator stops early, fewer rows than ``len(t)`` are returned.
        """
        check_is_fitted(self, "model_")
        kws = {"method": "LSODA", **DEFAULT_INTEGRATOR_KWS}
        if integrator_kws is not None:
            kws.update(integrator_kws)
        x0 = np.asarray(x0, dtype=float)
        return self.model_.simulate(x0, t, integrator_kws=kws)


def compare_trajectories(x_true, x_pred):
    """
    Error metrics between a reference and a predicted trajectory.

    If the prediction is shorter than the reference (the simulation
    diverged and the integrator stopped), the common prefix is compared
    and ``complete`` is False.

    Returns
    -------
    metrics: dict
        ``mse``, ``max_error``, ``r2``, ``n_compared`` and ``complete``.
    """
    x_true = validate_input(np.asarray(x_true, dtype=float))
    x_pred = validate_input(np.asarray(x_pred, dtype=float))
    if x_true.shape[1] != x_pred.shape[1]:
        raise ValueError("Trajectories must have the same number of states")
    n = min(len(x_true), len(x_pred))
    x_true_n, x_pred_n = x_true[:n], x_pred[:n]
    return {
        "mse": mean_squared_error(x_true_n, x_pred_n),
        "max_error": float(np.max(np.abs(x_true_n - x_pred_n))),
        "r2": r2_score(x_true_n, x_pred_n),
        "n_compared": n,
        "complete": n == len(x_true) and n == len(x_pred),
    }


def threshold_sweep(x, t, thresholds, x_test=None, t_test=None, x_dot=None, **kwargs):
    """
    Refit for a range of sparsity thresholds and rank by simulation error.

    Each candidate model is fit on ``(x, t)``, re-simulated from the first
    state of the test data and compared with it.

    Parameters
    ----------
    x, t: training trajectory and its times.

    thresholds: array of floats
        Thresholds to try.

    x_test, t_test: optional
        Test trajectory. Defaults to the training data.

    x_dot: optional
        Ideal derivatives of the training data.

    kwargs: dict
        Further :class:`ModelDiscovery` parameters.

    Returns
    -------
    results: list of dict
        One record per threshold with the threshold, the model complexity,
        the derivative R^2 and the :func:`compare_trajectories` metrics.

    best: dict
        The complete record with the lowest trajectory error.
    """
    if x_test is None:
        x_test, t_test = x, t
    results = []
    for threshold in thresholds:
        model = ModelDiscovery(threshold=threshold, **kwargs).fit(x, t, x_dot=x_dot)
        x_sim = model.simulate(x_test[0], t_test)
        record = {
            "threshold": threshold,
            "complexity": model.complexity,
            "score": model.score(x, t, x_dot=x_dot),
            "model": model,
        }
        record.update(compare_trajectories(x_test, x_sim))
        logger.info(
            "threshold=%g complexity=%d mse=%.4e",
            threshold,
            record["complexity"],
            record["mse"],
        )
        results.append(record)

    complete = [r for r in results if r["complete"]] or results
    best = min(complete, key=lambda r: r["mse"])
    return results, best
