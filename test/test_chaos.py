"""
Unit tests for the chaos analysis helpers.
"""
import numpy as np
import pytest

from dyntour.chaos import ContinuousDynamicalSystem
from dyntour.chaos import correlation_dimension
from dyntour.chaos import DiscreteDynamicalSystem
from dyntour.chaos import lyapunov
from dyntour.chaos import lyapunov_spectrum
from dyntour.chaos import orbit_diagram
from dyntour.chaos import sample_entropy
from dyntour.utils import henon_map
from dyntour.utils import logistic_map
from dyntour.utils import lorenz


@pytest.fixture(scope="module")
def lorenz_system():
    return ContinuousDynamicalSystem(
        lorenz, [1.0, 1.0, 1.0], integrator_kws={"rtol": 1e-9, "atol": 1e-9}
    )


@pytest.fixture(scope="module")
def henon():
    return DiscreteDynamicalSystem(henon_map, [0.0, 0.0], p=[1.4, 0.3])


def test_continuous_trajectory(lorenz_system):
    traj = lorenz_system.trajectory(2.0, dt=0.01)

    assert lorenz_system.dimension == 3
    assert traj.x.shape == (201, 3)
    np.testing.assert_allclose(traj.t[[0, -1]], [0.0, 2.0])
    np.testing.assert_allclose(traj.x0, [1.0, 1.0, 1.0])


def test_transient_is_discarded(lorenz_system):
    full = lorenz_system.trajectory(3.0, dt=0.01)
    tail = lorenz_system.trajectory(2.0, dt=0.01, Ttr=1.0)

    np.testing.assert_allclose(tail.t[[0, -1]], [1.0, 3.0])
    np.testing.assert_allclose(tail.x, full.x[100:], rtol=1e-5, atol=1e-5)


def test_bad_sampling(lorenz_system):
    with pytest.raises(ValueError):
        lorenz_system.trajectory(0.0)
    with pytest.raises(ValueError):
        lorenz_system.trajectory(1.0, dt=-0.1)


def test_discrete_trajectory(henon):
    traj = henon.trajectory(10)
    assert traj.x.shape == (11, 2)
    np.testing.assert_allclose(traj.x[1], [1.0, 0.0])
    np.testing.assert_allclose(traj.x[2], henon_map(traj.x[1], [1.4, 0.3]))

    shifted = henon.trajectory(5, Ttr=5)
    np.testing.assert_allclose(shifted.x, traj.x[5:])
    np.testing.assert_array_equal(shifted.t, np.arange(5, 11))


def test_lyapunov_lorenz_positive(lorenz_system):
    lam = lyapunov(lorenz_system, 50.0, dt=0.01, Ttr=5.0, fit="poly")
    assert 0 < lam < 3


def test_lyapunov_henon_positive(henon):
    lam = lyapunov(henon, 3000, Ttr=100, emb_dim=2, fit="poly")
    assert lam > 0


def test_lyapunov_spectrum_shape(henon):
    spectrum = lyapunov_spectrum(henon, 2000, Ttr=100, emb_dim=4, matrix_dim=4)
    assert spectrum.shape == (4,)
    assert np.all(np.isfinite(spectrum))
    assert spectrum.max() > 0


def test_sample_entropy_orders_signals():
    rng = np.random.default_rng(0)
    t = np.linspace(0, 20 * np.pi, 1000)
    regular = sample_entropy(np.sin(t))
    noisy = sample_entropy(rng.standard_normal(1000))
    assert regular < noisy


def test_correlation_dimension_henon(henon):
    series = henon.trajectory(2000, Ttr=100).x[:, 0]
    dim = correlation_dimension(series, emb_dim=2)
    assert 0.8 < dim < 1.8


def test_orbit_diagram():
    mus = np.array([2.5, 3.2, 4.0])
    mu, orbit = orbit_diagram(logistic_map, 0.4, mus, n=50, Ttr=1000)

    assert mu.shape == orbit.shape == (3, 50)
    np.testing.assert_array_equal(mu[:, 0], mus)
    # fixed point 1 - 1/mu
    np.testing.assert_allclose(orbit[0], 1 - 1 / 2.5, atol=1e-8)
    # period two orbit
    np.testing.assert_allclose(orbit[1, 2:], orbit[1, :-2], atol=1e-8)
    assert not np.allclose(orbit[1, 1:], orbit[1, :-1])
    assert np.all((orbit[2] >= 0) & (orbit[2] <= 1))
