"""
Hybrid (universal) differential equations trained with PyTorch.

A hybrid vector field adds a small neural network to a set of known
analytic terms. Trajectories are simulated differentiably with
:func:`torchdiffeq.odeint` and the network is fit to observed data by a
``torch.optim`` optimizer over a fixed iteration budget.
"""
from logging import getLogger
from typing import Callable
from typing import Optional

import numpy as np
import torch
from torch import nn
from torchdiffeq import odeint

logger = getLogger(__name__)

DTYPE = torch.float64

OPTIMIZERS = ("adam", "adamw", "lbfgs")


def mlp(n_in, n_out, width=5, depth=2, activation=nn.Tanh):
    """Fully connected network ``n_in -> width x depth -> n_out``."""
    layers = []
    size = n_in
    for _ in range(depth):
        layers += [nn.Linear(size, width), activation()]
        size = width
    layers.append(nn.Linear(size, n_out))
    return nn.Sequential(*layers).to(DTYPE)


def lotka_volterra_known_terms(p=(1.5, 1.0, 3.0, 1.0)):
    """Analytic part ``(alpha * prey, -gamma * predator)`` of Lotka-Volterra.

    The interaction terms are left to be learned.
    """
    alpha, gamma = p[0], p[2]

    def known(t, x):
        return torch.stack((alpha * x[..., 0], -gamma * x[..., 1]), dim=-1)

    return known


class HybridVectorField(nn.Module):
    """``f(t, x) = known(t, x) + network(x)``.

    Parameters
    ----------
    network: torch.nn.Module
        Learned component, mapping states to derivatives.

    known: callable, optional
        Known analytic terms ``known(t, x)`` written with torch operations.
        If None, the field is a plain neural ODE.
    """

    def __init__(self, network: nn.Module, known: Optional[Callable] = None):
        super().__init__()
        self.network = network
        self.known = known

    def forward(self, t, x):
        out = self.network(x)
        if self.known is not None:
            out = out + self.known(t, x)
        return out


class HybridModel:
    """
    Simulate a :class:`HybridVectorField` and fit it to observed data.

    Parameters
    ----------
    vector_field: HybridVectorField
        Trainable vector field.

    x0: array-like, shape (n_states,)
        Initial state of every simulation.

    t: array-like, shape (n_samples,)
        Times at which the trajectory is observed.

    method: string, optional (default ``dopri5``)
        Any :func:`torchdiffeq.odeint` method, e.g. ``rk4`` or ``dopri5``.

    rtol, atol: float, optional
        Tolerances of adaptive methods.

    options: dict, optional
        Extra solver options, e.g. ``{"step_size": 0.01}`` for ``rk4``.

    Attributes
    ----------
    loss_history_: list of float
        Loss at the start of every optimizer iteration, accumulated over
        all calls to :meth:`fit`.
    """

    def __init__(
        self,
        vector_field: HybridVectorField,
        x0,
        t,
        method: str = "dopri5",
        rtol: float = 1e-6,
        atol: float = 1e-6,
        options: Optional[dict] = None,
    ):
        self.vector_field = vector_field.to(DTYPE)
        self.x0 = torch.as_tensor(np.asarray(x0, dtype=float), dtype=DTYPE)
        self.t = torch.as_tensor(np.asarray(t, dtype=float), dtype=DTYPE)
        self.method = method
        self.rtol = rtol
        self.atol = atol
        self.options = options
        self.loss_history_ = []

    def parameters(self):
        return self.vector_field.parameters()

    def predict(self):
        """Simulated trajectory, a tensor of shape (n_samples, n_states)."""
        return odeint(
            self.vector_field,
            self.x0,
            self.t,
            rtol=self.rtol,
            atol=self.atol,
            method=self.method,
            options=self.options,
        )

    def loss(self, x_obs):
        """Sum of squared errors between the simulation and ``x_obs``."""
        x_obs = torch.as_tensor(np.asarray(x_obs, dtype=float), dtype=DTYPE)
        return torch.sum((self.predict() - x_obs) ** 2)

    def _make_optimizer(self, optimizer, step_size):
        if optimizer == "adam":
            return torch.optim.Adam(self.parameters(), lr=step_size)
        elif optimizer == "adamw":
            return torch.optim.AdamW(self.parameters(), lr=step_size)
        return torch.optim.LBFGS(
            self.parameters(), lr=step_size, line_search_fn="strong_wolfe"
        )

    def fit(
        self,
        x_obs,
        max_iter: int = 200,
        optimizer: str = "adam",
        step_size: Optional[float] = None,
        callback: Optional[Callable[[int, float], object]] = None,
        print_every: int = 50,
    ):
        """
        Minimize :meth:`loss` over the network parameters.

        Parameters
        ----------
        x_obs: array-like, shape (n_samples, n_states)
            Observed trajectory.

        max_iter: int, optional (default 200)
            Number of optimizer iterations. There is no other stopping
            criterion unless ``callback`` asks for one.

        optimizer: string, optional (default ``adam``)
            ``adam``, ``adamw`` or ``lbfgs``.

        step_size: float, optional
            Learning rate. Defaults to 0.01 for Adam/AdamW and 1 for LBFGS.

        callback: callable, optional
            Called as ``callback(iteration, loss)`` with the loss before each
            step. Returning True stops the optimization.

        print_every: int, optional (default 50)
            Log progress every this many iterations.

        Returns
        -------
        self: the fitted :class:`HybridModel`
        """
        if optimizer not in OPTIMIZERS:
            raise ValueError(f"optimizer must be one of {OPTIMIZERS}")
        if max_iter < 0:
            raise ValueError("max_iter cannot be negative")
        if step_size is None:
            step_size = 1.0 if optimizer == "lbfgs" else 1e-2
        opt = self._make_optimizer(optimizer, step_size)
        x_obs = torch.as_tensor(np.asarray(x_obs, dtype=float), dtype=DTYPE)

        def closure():
            opt.zero_grad()
            loss = self.loss(x_obs)
            loss.backward()
            return loss

        for it in range(max_iter):
            # Both Adam and LBFGS return the loss of the first closure call,
            # i.e. the loss before the update.
            loss = opt.step(closure).item()
            self.loss_history_.append(loss)
            if print_every and it % print_every == 0:
                logger.info("[%s] iter=%d loss=%.6e", optimizer, it, loss)
            if callback is not None and callback(it, loss):
                logger.info("Stopped by callback at iteration %d", it)
                break
        return self

    def missing_terms(self, x):
        """Network output on the states ``x``, as a numpy array.

        For a hybrid field this is the learned estimate of the terms absent
        from the known part, ready for symbolic regression.
        """
        x = torch.as_tensor(np.asarray(x, dtype=float), dtype=DTYPE)
        with torch.no_grad():
            return self.vector_field.network(x).numpy()

    def simulate(self):
        """Simulated trajectory as a numpy array."""
        with torch.no_grad():
            return self.predict().numpy()
