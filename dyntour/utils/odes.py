import numpy as np


# Exponential growth, u' = a * u
def exponential_growth(t, x, p=[1.01]):
    return [p[0] * x[0]]


# Lorenz model, p = (sigma, rho, beta)
def lorenz(t, x, p=[10, 28, 8 / 3]):
    return [
        p[0] * (x[1] - x[0]),
        x[0] * (p[1] - x[2]) - x[1],
        x[0] * x[1] - p[2] * x[2],
    ]


def lorenz_inplace(dx, t, x, p=[10, 28, 8 / 3]):
    dx[0] = p[0] * (x[1] - x[0])
    dx[1] = x[0] * (p[1] - x[2]) - x[1]
    dx[2] = x[0] * x[1] - p[2] * x[2]


# Lotka-Volterra predator-prey model, p = (alpha, beta, gamma, delta)
# x[0] is the prey population, x[1] the predator population
def lotka_volterra(t, x, p=[1.5, 1.0, 3.0, 1.0]):
    return [
        p[0] * x[0] - p[1] * x[0] * x[1],
        -p[2] * x[1] + p[3] * x[0] * x[1],
    ]


def lotka_volterra_inplace(dx, t, x, p=[1.5, 1.0, 3.0, 1.0]):
    dx[0] = p[0] * x[0] - p[1] * x[0] * x[1]
    dx[1] = -p[2] * x[1] + p[3] * x[0] * x[1]


# Rossler model
def rossler(t, x, p=[0.2, 0.2, 5.7]):
    return [-x[1] - x[2], x[0] + p[0] * x[1], p[1] + (x[0] - p[2]) * x[2]]


# Van der Pol ODE
def van_der_pol(t, x, p=[0.5]):
    return [x[1], p[0] * (1 - x[0] ** 2) * x[1] - x[0]]


# Simple pendulum, x = (theta, omega), p = (g, L)
def pendulum(t, x, p=[9.81, 1.0]):
    return [x[1], -(p[0] / p[1]) * np.sin(x[0])]


# Henon map
def henon_map(x, p=[1.4, 0.3]):
    return [1 - p[0] * x[0] ** 2 + x[1], p[1] * x[0]]


# Logistic map model
def logistic_map(x, mu):
    return mu * x * (1 - x)


# Geometric Brownian motion, dX = a X dt + b X dW, p = (a, b)
def geometric_brownian_drift(t, x, p=[1.01, 0.87]):
    return [p[0] * x[0]]


def geometric_brownian_diffusion(t, x, p=[1.01, 0.87]):
    return [p[1] * x[0]]


# Additive, diagonal noise for the stochastic Lorenz system
def lorenz_additive_noise(t, x, p=[3.0]):
    return [p[0], p[0], p[0]]


def as_out_of_place(f_inplace):
    """Wrap an in-place vector field ``f(dx, t, x, p)`` as ``f(t, x, p)``.

    The wrapper allocates a fresh output buffer shaped like the state on
    every call and returns it.
    """

    def f(t, x, *args):
        dx = np.empty_like(np.asarray(x, dtype=float))
        f_inplace(dx, t, x, *args)
        return dx

    f.__name__ = getattr(f_inplace, "__name__", "f")
    return f
