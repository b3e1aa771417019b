"""
Chaos analysis of dynamical systems.

Systems are sampled with :mod:`dyntour.problems`; Lyapunov exponents,
sample entropy and correlation dimension are estimated from the sampled
series by :mod:`nolds`.
"""
from logging import getLogger
from typing import Callable
from typing import Optional
from typing import Sequence

import nolds
import numpy as np

from .problems import ODEProblem
from .problems import solve
from .problems import Trajectory
from .utils import validate_state

logger = getLogger(__name__)


class ContinuousDynamicalSystem:
    """A flow ``x' = f(t, x, p)`` with a fixed initial state.

    Parameters
    ----------
    f: callable
        Out-of-place vector field ``f(t, x, p)``.

    u0: array-like
        Initial state.

    p: sequence of floats, optional
        Parameter vector. If None, the defaults of ``f`` are used.

    integrator_kws: dict, optional
        Keyword arguments passed to :func:`dyntour.problems.solve`.
    """

    def __init__(
        self,
        f: Callable,
        u0,
        p: Optional[Sequence[float]] = None,
        integrator_kws: Optional[dict] = None,
    ):
        self.f = f
        self.u0 = validate_state(u0)
        self.p = p
        self.integrator_kws = integrator_kws if integrator_kws is not None else {}

    @property
    def dimension(self):
        return len(self.u0)

    def trajectory(self, T, dt=0.01, Ttr=0.0) -> Trajectory:
        """Sample the flow every ``dt`` for ``T`` time units.

        The first ``Ttr`` time units are integrated but discarded.
        """
        if T <= 0 or dt <= 0:
            raise ValueError("T and dt must be positive")
        t_eval = Ttr + dt * np.arange(int(round(T / dt)) + 1)
        problem = ODEProblem(self.f, self.u0, (0.0, t_eval[-1]), self.p)
        if Ttr == 0:
            return solve(problem, t_eval=t_eval, **self.integrator_kws)
        transient = solve(
            problem.remake(tspan=(0.0, Ttr)), t_eval=[Ttr], **self.integrator_kws
        )
        problem = problem.remake(u0=transient.x[-1], tspan=(Ttr, t_eval[-1]))
        return solve(problem, t_eval=t_eval, **self.integrator_kws)


class DiscreteDynamicalSystem:
    """A map ``x_{n+1} = f(x_n, p)`` with a fixed initial state."""

    def __init__(self, f: Callable, u0, p: Optional[Sequence[float]] = None):
        self.f = f
        self.u0 = validate_state(u0)
        self.p = p

    @property
    def dimension(self):
        return len(self.u0)

    def step(self, x):
        if self.p is None:
            return np.asarray(self.f(x), dtype=float)
        return np.asarray(self.f(x, self.p), dtype=float)

    def trajectory(self, n, Ttr=0) -> Trajectory:
        """Iterate the map ``n`` times after ``Ttr`` discarded iterations.

        The returned trajectory holds ``n + 1`` states, the first one being
        the state reached after the transient.
        """
        x = self.u0
        for _ in range(Ttr):
            x = self.step(x)
        states = np.zeros((n + 1, self.dimension))
        states[0] = x
        for i in range(1, n + 1):
            states[i] = self.step(states[i - 1])
        return Trajectory(np.arange(Ttr, Ttr + n + 1, dtype=float), states)


def _series(system, T, dt, Ttr, component):
    if isinstance(system, DiscreteDynamicalSystem):
        trajectory = system.trajectory(int(T), Ttr=int(Ttr))
        tau = 1.0
    else:
        trajectory = system.trajectory(T, dt=dt, Ttr=Ttr)
        tau = dt
    return trajectory.x[:, component], tau


def lyapunov(system, T, dt=0.01, Ttr=0.0, component=0, emb_dim=10, **kwargs):
    """Largest Lyapunov exponent of ``system``.

    The system is sampled for ``T`` time units (or ``T`` iterations of a
    map) and the exponent is estimated from one state ``component`` with
    Rosenstein's method, :func:`nolds.lyap_r`. Flows are rescaled by ``dt``
    so the result is per time unit.  Extra keyword arguments go to
    :func:`nolds.lyap_r`.
    """
    series, tau = _series(system, T, dt, Ttr, component)
    exponent = nolds.lyap_r(series, emb_dim=emb_dim, tau=tau, **kwargs)
    logger.debug("lyap_r on %d samples: %g", len(series), exponent)
    return exponent


def lyapunov_spectrum(
    system, T, dt=0.01, Ttr=0.0, component=0, emb_dim=10, matrix_dim=4, **kwargs
):
    """First ``matrix_dim`` Lyapunov exponents of ``system``.

    Uses the method of Eckmann et al., :func:`nolds.lyap_e`, on the delay
    embedding of one state ``component``. ``emb_dim - 1`` must be a multiple
    of ``matrix_dim - 1``.
    """
    series, tau = _series(system, T, dt, Ttr, component)
    return nolds.lyap_e(
        series, emb_dim=emb_dim, matrix_dim=matrix_dim, tau=tau, **kwargs
    )


def sample_entropy(series, emb_dim=2, tolerance=None, **kwargs):
    """Sample entropy of a scalar series, :func:`nolds.sampen`."""
    series = np.asarray(series, dtype=float)
    return nolds.sampen(series, emb_dim=emb_dim, tolerance=tolerance, **kwargs)


def correlation_dimension(series, emb_dim=2, rvals=None, fit="poly", **kwargs):
    """Grassberger-Procaccia correlation dimension, :func:`nolds.corr_dim`."""
    series = np.asarray(series, dtype=float)
    return nolds.corr_dim(series, emb_dim, rvals=rvals, fit=fit, **kwargs)


def orbit_diagram(f, x0, parameters, n=100, Ttr=500):
    """Long-term orbits of a one-dimensional map over a parameter range.

    Parameters
    ----------
    f: callable
        Map ``f(x, mu)``, vectorized over numpy arrays (e.g.
        :func:`dyntour.utils.logistic_map`).

    x0: float
        Initial state, shared by all parameter values.

    parameters: array-like, shape (n_parameters,)
        Values of ``mu`` to scan.

    n: int
        Number of iterates to keep per parameter value.

    Ttr: int
        Number of transient iterates to discard.

    Returns
    -------
    mu: numpy array, shape (n_parameters, n)
        Parameter value of each point.

    orbit: numpy array, shape (n_parameters, n)
        Iterates of the map.
    """
    parameters = np.asarray(parameters, dtype=float)
    x = np.full(parameters.shape, float(x0))
    for _ in range(Ttr):
        x = f(x, parameters)
    orbit = np.zeros((len(parameters), n))
    for i in range(n):
        x = f(x, parameters)
        orbit[:, i] = x
    mu = np.repeat(parameters[:, np.newaxis], n, axis=1)
    return mu, orbit
