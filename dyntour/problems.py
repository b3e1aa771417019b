"""
Problem descriptors and thin wrappers around external ODE/SDE integrators.

All step-size control and error estimation happen inside
:func:`scipy.integrate.solve_ivp` (or :func:`scipy.integrate.odeint`) and
:mod:`sdeint`; this module only packages a vector field, an initial state,
a time span and a parameter vector into a request and hands it over.
"""
import warnings
from dataclasses import dataclass
from dataclasses import replace
from logging import getLogger
from typing import Callable
from typing import Optional
from typing import Sequence

import numpy as np
import sdeint
from scipy.integrate import odeint
from scipy.integrate import solve_ivp

from ._typing import Float1D
from ._typing import Float2D
from .utils import as_out_of_place
from .utils import validate_state
from .utils import validate_tspan

logger = getLogger(__name__)

DEFAULT_INTEGRATOR_KWS = {"rtol": 1e-12, "atol": 1e-12}

SDE_SCHEMES = ("ito", "euler", "stratonovich", "heun")


def _bind(f, p):
    if p is None:
        return f

    def bound(t, x):
        return f(t, x, p)

    return bound


@dataclass
class ODEProblem:
    """An initial value problem ``x' = f(t, x, p)``, ``x(t0) = u0``.

    f: vector field.  Out-of-place fields have signature ``f(t, x, p)`` and
        return the derivative; in-place fields have signature
        ``f(dx, t, x, p)`` and overwrite ``dx``.
    u0: initial state.
    tspan: ``(t0, t1)``.
    p: parameter vector, or None to use the field's own defaults.
    inplace: whether ``f`` is an in-place field.
    """

    f: Callable
    u0: Float1D
    tspan: tuple[float, float]
    p: Optional[Sequence[float]] = None
    inplace: bool = False

    def __post_init__(self):
        self.u0 = validate_state(self.u0)
        self.tspan = validate_tspan(self.tspan)

    def rhs(self):
        """Return a scipy-compatible callable ``rhs(t, x)``."""
        f = as_out_of_place(self.f) if self.inplace else self.f
        return _bind(f, self.p)

    def remake(self, **changes):
        """Copy of the problem with some fields replaced."""
        return replace(self, **changes)


@dataclass
class SDEProblem:
    """An Ito problem ``dx = f(t, x, p) dt + g(t, x, p) dW``.

    ``g`` returns the diagonal of the diffusion matrix, one noise
    source per state.
    """

    f: Callable
    g: Callable
    u0: Float1D
    tspan: tuple[float, float]
    p: Optional[Sequence[float]] = None

    def __post_init__(self):
        self.u0 = validate_state(self.u0)
        self.tspan = validate_tspan(self.tspan)


@dataclass
class Trajectory:
    """States ``x`` (n_samples, n_states) sampled at times ``t``.

    ``success`` and ``message`` are passed through unchanged from the
    integrator that produced the trajectory.
    """

    t: Float1D
    x: Float2D
    success: bool = True
    message: str = ""

    @property
    def x0(self):
        return self.x[0]

    @property
    def n_states(self):
        return self.x.shape[1]

    def __len__(self):
        return len(self.t)

    def __iter__(self):
        return iter((self.t, self.x))


def solve(
    problem: ODEProblem,
    method: str = "LSODA",
    t_eval=None,
    integrator: str = "solve_ivp",
    **integrator_kws,
) -> Trajectory:
    """
    Integrate an :class:`ODEProblem`.

    Parameters
    ----------
    problem: ODEProblem
        The request to solve.

    method: string, optional (default ``LSODA``)
        Integration method passed to :func:`scipy.integrate.solve_ivp`,
        e.g. ``RK45``, ``DOP853``, ``Radau``, ``BDF`` or ``LSODA``.
        Ignored by ``odeint``.

    t_eval: numpy array, optional (default None)
        Times at which to store the solution. If None, the times chosen
        by the solver are returned (``solve_ivp`` only).

    integrator: string, optional (default ``solve_ivp``)
        Either ``solve_ivp`` or ``odeint``.

    integrator_kws: dict, optional
        Extra keyword arguments for the integrator, e.g. tolerances.
        Missing tolerances fall back to :data:`DEFAULT_INTEGRATOR_KWS`.

    Returns
    -------
    trajectory: Trajectory
    """
    kws = {**DEFAULT_INTEGRATOR_KWS, **integrator_kws}
    rhs = problem.rhs()
    t0, t1 = problem.tspan
    name = getattr(problem.f, "__name__", "f")
    logger.debug("Integrating %s over %s with %s", name, problem.tspan, integrator)

    if integrator == "solve_ivp":
        sol = solve_ivp(
            rhs, (t0, t1), problem.u0, method=method, t_eval=t_eval, **kws
        )
        if not sol.success:
            warnings.warn(
                f"solve_ivp stopped at t={sol.t[-1]}: {sol.message}", RuntimeWarning
            )
        return Trajectory(sol.t, sol.y.T, success=sol.success, message=sol.message)
    elif integrator == "odeint":
        if t_eval is None:
            raise ValueError("odeint requires t_eval")
        x, info = odeint(
            rhs, problem.u0, t_eval, tfirst=True, full_output=True, **kws
        )
        success = info["message"] == "Integration successful."
        if not success:
            warnings.warn(f"odeint: {info['message']}", RuntimeWarning)
        message = info["message"]
        return Trajectory(np.asarray(t_eval), x, success=success, message=message)
    else:
        raise ValueError("Integrator not supported, exiting")


def solve_sde(
    problem: SDEProblem,
    t_eval,
    scheme: str = "ito",
    random_state: Optional[int] = None,
) -> Trajectory:
    """
    Integrate an :class:`SDEProblem` on an evenly spaced grid with sdeint.

    Parameters
    ----------
    problem: SDEProblem

    t_eval: numpy array
        Evenly spaced times, starting at ``problem.tspan[0]``.

    scheme: string, optional (default ``ito``)
        ``ito`` (Roessler SRI2), ``euler`` (Euler-Maruyama),
        ``stratonovich`` (Roessler SRS2) or ``heun`` (Stratonovich Heun).

    random_state: int, optional
        Seed for the Wiener increments.

    Returns
    -------
    trajectory: Trajectory
    """
    if scheme not in SDE_SCHEMES:
        raise ValueError(f"scheme must be one of {SDE_SCHEMES}, got {scheme}")
    t_eval = np.asarray(t_eval, dtype=float)
    if t_eval.ndim != 1 or len(t_eval) < 2:
        raise ValueError("t_eval must hold at least two times")
    if not np.isclose(t_eval[0], problem.tspan[0]):
        raise ValueError("t_eval must start at tspan[0]")
    n_states = len(problem.u0)

    f = _bind(problem.f, problem.p)
    g = _bind(problem.g, problem.p)

    # sdeint expects f(y, t) and a full (d, m) diffusion matrix
    def drift(y, t):
        return np.asarray(f(t, y), dtype=float)

    def diffusion(y, t):
        return np.diag(np.asarray(g(t, y), dtype=float))

    rng = np.random.default_rng(random_state)
    h = (t_eval[-1] - t_eval[0]) / (len(t_eval) - 1)
    dW = rng.normal(0.0, np.sqrt(h), (len(t_eval) - 1, n_states))
    logger.debug("Integrating SDE over %s with %s scheme", problem.tspan, scheme)

    if scheme == "ito":
        x = sdeint.itoSRI2(drift, diffusion, problem.u0, t_eval, dW=dW)
    elif scheme == "euler":
        x = sdeint.itoEuler(drift, diffusion, problem.u0, t_eval, dW=dW)
    elif scheme == "stratonovich":
        x = sdeint.stratSRS2(drift, diffusion, problem.u0, t_eval, dW=dW)
    else:
        x = sdeint.stratHeun(drift, diffusion, problem.u0, t_eval, dW=dW)
    return Trajectory(t_eval, x)


def sample(problem: ODEProblem, t_eval, noise=0.0, random_state=None, **kwargs):
    """Solve ``problem`` and add Gaussian measurement noise.

    The noise on each state is ``noise`` times that state's standard
    deviation along the trajectory.  Extra keyword arguments go to
    :func:`solve`.
    """
    if noise < 0:
        raise ValueError("noise cannot be negative")
    trajectory = solve(problem, t_eval=t_eval, **kwargs)
    if noise == 0:
        return trajectory
    rng = np.random.default_rng(random_state)
    x = trajectory.x
    x_noisy = x + noise * np.std(x, axis=0) * rng.standard_normal(x.shape)
    return Trajectory(trajectory.t, x_noisy, trajectory.success, trajectory.message)
