"""
Unit tests for model discovery.
"""
import numpy as np
import pysindy as ps
import pytest
from sklearn.base import clone
from sklearn.exceptions import NotFittedError

from dyntour.discovery import build_basis
from dyntour.discovery import compare_trajectories
from dyntour.discovery import ModelDiscovery
from dyntour.discovery import threshold_sweep
from dyntour.utils import lorenz

# Coefficients of Lotka-Volterra with p = (1.5, 1, 3, 1) in the basis
# [1, x, y, x^2, x y, y^2]
LV_COEFFICIENTS = np.array(
    [
        [0.0, 1.5, 0.0, 0.0, -1.0, 0.0],
        [0.0, 0.0, -3.0, 0.0, 1.0, 0.0],
    ]
)


def test_not_fitted():
    model = ModelDiscovery()
    x = np.ones((10, 2))

    with pytest.raises(NotFittedError):
        model.equations()
    with pytest.raises(NotFittedError):
        model.coefficients()
    with pytest.raises(NotFittedError):
        model.predict(x)
    with pytest.raises(NotFittedError):
        model.simulate(x[0], np.arange(10))


def test_bad_parameters():
    with pytest.raises(ValueError):
        ModelDiscovery(threshold=-1)
    with pytest.raises(ValueError):
        ModelDiscovery(optimizer="lasso")


def test_get_params_and_clone():
    model = ModelDiscovery(threshold=0.3, degree=3, feature_names=["x", "y"])
    params = clone(model).get_params()
    assert params["threshold"] == 0.3
    assert params["degree"] == 3
    assert params["feature_names"] == ["x", "y"]


@pytest.mark.parametrize(
    "degree, n_frequencies, n_features", [(2, 0, 6), (3, 0, 10), (2, 1, 10)]
)
def test_basis_size(data_lotka_volterra, degree, n_frequencies, n_features):
    x, t, x_dot, _ = data_lotka_volterra
    model = ModelDiscovery(degree=degree, n_frequencies=n_frequencies)
    model.fit(x, t, x_dot=x_dot)

    assert len(model.get_feature_names()) == n_features
    assert model.coefficients().shape == (2, n_features)


def test_build_basis_types():
    assert isinstance(build_basis(2), ps.PolynomialLibrary)
    assert not isinstance(build_basis(2, n_frequencies=2), ps.PolynomialLibrary)


def test_ideal_derivatives_recover_lotka_volterra(data_lotka_volterra):
    x, t, x_dot, _ = data_lotka_volterra
    model = ModelDiscovery(threshold=0.1, feature_names=["x", "y"])
    model.fit(x, t, x_dot=x_dot)

    np.testing.assert_allclose(model.coefficients(), LV_COEFFICIENTS, atol=1e-6)
    assert model.complexity == 4
    assert model.score(x, t, x_dot=x_dot) == pytest.approx(1.0)
    assert len(model.equations()) == 2


def test_estimated_derivatives_recover_lotka_volterra(data_lotka_volterra):
    x, t, _, _ = data_lotka_volterra
    model = ModelDiscovery(threshold=0.1)
    model.fit(x, t)

    np.testing.assert_allclose(model.coefficients(), LV_COEFFICIENTS, atol=1e-2)


def test_smoothed_derivatives(data_lotka_volterra):
    x, t, _, _ = data_lotka_volterra
    model = ModelDiscovery(
        threshold=0.1, differentiation_method=ps.SmoothedFiniteDifference()
    )
    model.fit(x, t)

    np.testing.assert_array_equal(model.coefficients() != 0, LV_COEFFICIENTS != 0)


def test_sr3_support(data_lotka_volterra):
    x, t, x_dot, _ = data_lotka_volterra
    model = ModelDiscovery(threshold=0.1, optimizer="sr3").fit(x, t, x_dot=x_dot)

    np.testing.assert_array_equal(
        np.abs(model.coefficients()) > 1e-3, LV_COEFFICIENTS != 0
    )


def test_ideal_derivatives_recover_lorenz(data_lorenz):
    x, t = data_lorenz
    x_dot = np.array([lorenz(0.0, xi) for xi in x])
    model = ModelDiscovery(threshold=0.5).fit(x, t, x_dot=x_dot)

    assert model.complexity == 7


def test_resimulation_is_deterministic(data_lotka_volterra):
    x, t, _, _ = data_lotka_volterra
    model = ModelDiscovery(threshold=0.1).fit(x, t)

    x_sim = model.simulate(x[0], t[:200])
    np.testing.assert_array_equal(x_sim, model.simulate(x[0], t[:200]))
    assert x_sim.shape == (200, 2)


def test_resimulation_matches_data(data_lotka_volterra):
    x, t, x_dot, _ = data_lotka_volterra
    model = ModelDiscovery(threshold=0.1).fit(x, t, x_dot=x_dot)

    metrics = compare_trajectories(x, model.simulate(x[0], t))
    assert metrics["complete"]
    assert metrics["mse"] < 1e-6
    assert metrics["r2"] > 0.999


def test_vector_field(data_lotka_volterra):
    x, t, x_dot, _ = data_lotka_volterra
    model = ModelDiscovery(threshold=0.1).fit(x, t, x_dot=x_dot)
    f = model.vector_field()

    np.testing.assert_allclose(f(0.0, x[10]), model.predict(x[10:11])[0])
    np.testing.assert_allclose(f(0.0, x[10]), x_dot[10], atol=1e-6)


def test_compare_trajectories():
    rng = np.random.default_rng(0)
    x = rng.standard_normal((50, 3))

    metrics = compare_trajectories(x, x)
    assert metrics["mse"] == 0
    assert metrics["max_error"] == 0
    assert metrics["r2"] == 1
    assert metrics["complete"]
    assert metrics["n_compared"] == 50

    metrics = compare_trajectories(x, x[:20] + 1)
    assert not metrics["complete"]
    assert metrics["n_compared"] == 20
    assert metrics["mse"] == pytest.approx(1.0)
    assert metrics["max_error"] == pytest.approx(1.0)

    with pytest.raises(ValueError):
        compare_trajectories(x, x[:, :2])


def test_threshold_sweep(data_lotka_volterra):
    x, t, x_dot, _ = data_lotka_volterra
    x, t, x_dot = x[:300], t[:300], x_dot[:300]
    results, best = threshold_sweep(x, t, [0.1, 10.0], x_dot=x_dot)

    assert [r["threshold"] for r in results] == [0.1, 10.0]
    assert results[1]["complexity"] == 0
    assert best["threshold"] == 0.1
    assert best["complexity"] == 4
    assert best["mse"] < results[1]["mse"]


def test_threshold_sweep_skips_diverged_simulations(data_lotka_volterra, monkeypatch):
    x, t, x_dot, _ = data_lotka_volterra
    x, t, x_dot = x[:300], t[:300], x_dot[:300]
    simulate = ModelDiscovery.simulate

    # The accurate model stops early; its short prefix has the smallest error
    def stop_early(self, x0, t, integrator_kws=None):
        x_sim = simulate(self, x0, t, integrator_kws)
        return x_sim[:50] if self.threshold == 0.1 else x_sim

    monkeypatch.setattr(ModelDiscovery, "simulate", stop_early)
    results, best = threshold_sweep(x, t, [0.1, 10.0], x_dot=x_dot)

    assert not results[0]["complete"]
    assert results[0]["n_compared"] == 50
    assert results[1]["complete"]
    assert results[0]["mse"] < results[1]["mse"]
    assert best["threshold"] == 10.0
