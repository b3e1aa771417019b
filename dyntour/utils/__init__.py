from .base import flatten_2d_tall
from .base import validate_input
from .base import validate_state
from .base import validate_tspan
from .odes import as_out_of_place
from .odes import exponential_growth
from .odes import geometric_brownian_diffusion
from .odes import geometric_brownian_drift
from .odes import henon_map
from .odes import logistic_map
from .odes import lorenz
from .odes import lorenz_additive_noise
from .odes import lorenz_inplace
from .odes import lotka_volterra
from .odes import lotka_volterra_inplace
from .odes import pendulum
from .odes import rossler
from .odes import van_der_pol

__all__ = [
    "flatten_2d_tall",
    "validate_input",
    "validate_state",
    "validate_tspan",
    "as_out_of_place",
    "exponential_growth",
    "lorenz",
    "lorenz_inplace",
    "lotka_volterra",
    "lotka_volterra_inplace",
    "rossler",
    "van_der_pol",
    "pendulum",
    "henon_map",
    "logistic_map",
    "geometric_brownian_drift",
    "geometric_brownian_diffusion",
    "lorenz_additive_noise",
]
