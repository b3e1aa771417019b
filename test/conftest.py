"""
Shared pytest fixtures for unit tests.
"""
import matplotlib
import numpy as np
import pytest
from scipy.integrate import solve_ivp

from dyntour.utils.odes import lorenz
from dyntour.utils.odes import lotka_volterra

matplotlib.use("Agg")


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "notebooks: runs the example scripts (slow)"
    )


@pytest.fixture(scope="session")
def data_1d():
    t = np.linspace(0, 1, 10)
    x = 2 * t.reshape(-1, 1)
    return x, t


@pytest.fixture(scope="session")
def data_lorenz():

    t = np.linspace(0, 1, 101)
    x0 = [8, 27, -7]
    x = solve_ivp(
        lorenz, (t[0], t[-1]), x0, t_eval=t, rtol=1e-10, atol=1e-10
    ).y.T

    return x, t


@pytest.fixture(scope="session")
def data_lotka_volterra():

    p = [1.5, 1.0, 3.0, 1.0]
    t = np.linspace(0, 10, 1001)
    x0 = [1.0, 1.0]
    x = solve_ivp(
        lotka_volterra,
        (t[0], t[-1]),
        x0,
        t_eval=t,
        args=(p,),
        rtol=1e-10,
        atol=1e-10,
    ).y.T
    x_dot = np.array([lotka_volterra(ti, xi, p) for ti, xi in zip(t, x)])

    return x, t, x_dot, p
