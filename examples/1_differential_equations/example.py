#!/usr/bin/env python
# coding: utf-8
# # Solving differential equations
# This notebook shows how an initial value problem is assembled and handed to an external integrator. The integrators themselves (step-size control, error estimation, stiffness detection) live in `scipy.integrate`; stochastic problems go to `sdeint`.
#
# Every example follows the same pattern:
#
#  1. write a vector field $f(t, x, p)$ returning $\dot x$;
#  2. package it with an initial state $x_0$, a time span $(t_0, t_1)$ and a parameter vector $p$ in an `ODEProblem`;
#  3. call `solve` and look at the returned `Trajectory`.
# ## Exponential growth
# The simplest problem is $\dot u = a u$ with solution $u(t) = u_0 e^{a t}$.
# In[1]:
import matplotlib.pyplot as plt
import numpy as np

import dyntour as dt
from dyntour.plotting import plot_comparison
from dyntour.plotting import plot_phase_portrait
from dyntour.plotting import plot_trajectory
from dyntour.utils import exponential_growth
from dyntour.utils import geometric_brownian_diffusion
from dyntour.utils import geometric_brownian_drift
from dyntour.utils import lorenz
from dyntour.utils import lorenz_inplace
from dyntour.utils import lotka_volterra

if __name__ != "testing":
    t_end = 100.0
    n_sde = 1000
else:
    t_end = 5.0
    n_sde = 50

plt.ion()


# In[2]:


problem = dt.ODEProblem(exponential_growth, [0.5], (0.0, 1.0), p=[1.01])
sol = dt.solve(problem, method="RK45", rtol=1e-8, atol=1e-8)

t_exact = np.linspace(0, 1, 50)
x_exact = 0.5 * np.exp(1.01 * t_exact)
ax = plot_trajectory(sol.t, sol.x, labels=["solver"])
ax.plot(t_exact, x_exact, "k--", label="exact")
ax.legend()


# The solver picked its own time steps. Passing `t_eval` asks for the solution at given times instead.

# In[3]:


sol = dt.solve(problem, t_eval=t_exact)
print("max error:", np.max(np.abs(sol.x[:, 0] - x_exact)))


# ## The Lorenz system
# $$
# \dot x = \sigma (y - x), \qquad \dot y = x (\rho - z) - y, \qquad \dot z = x y - \beta z
# $$
#
# with the classic parameters $p = (\sigma, \rho, \beta) = (10, 28, 8/3)$.

# In[4]:


p = [10, 28, 8 / 3]
u0 = [1.0, 0.0, 0.0]
t_eval = np.arange(0, t_end, 0.01)
lorenz_problem = dt.ODEProblem(lorenz, u0, (0.0, t_end), p=p)
sol = dt.solve(lorenz_problem, t_eval=t_eval)
plot_phase_portrait(sol.x, labels=["x", "y", "z"], lw=0.5)


# Vector fields can also be written in place: `lorenz_inplace(dx, t, x, p)` overwrites a caller-supplied buffer instead of returning a new list. The problem is told so with `inplace=True`, and the result is identical.

# In[5]:


inplace_problem = dt.ODEProblem(
    lorenz_inplace, u0, (0.0, t_end), p=p, inplace=True
)
sol_inplace = dt.solve(inplace_problem, t_eval=t_eval)
print("identical:", np.allclose(sol.x, sol_inplace.x))


# Different methods and tolerances are a keyword away. A loose tolerance drifts away from the accurate solution after a few Lyapunov times.

# In[6]:


loose = dt.solve(lorenz_problem, method="RK45", t_eval=t_eval, rtol=1e-3, atol=1e-6)
plot_comparison(t_eval, sol.x, loose.x, labels=["x", "y", "z"])


# ## Lotka-Volterra
# Prey $x$ and predators $y$:
#
# $$
# \dot x = \alpha x - \beta x y, \qquad \dot y = -\gamma y + \delta x y.
# $$

# In[7]:


lv_problem = dt.ODEProblem(
    lotka_volterra, [1.0, 1.0], (0.0, 10.0), p=[1.5, 1.0, 3.0, 1.0]
)
t_lv = np.linspace(0, 10, 500)
sol = dt.solve(lv_problem, method="DOP853", t_eval=t_lv)
plot_trajectory(sol.t, sol.x, labels=["prey", "predator"])
plot_phase_portrait(sol.x, labels=["prey", "predator"])


# `remake` changes part of a problem, e.g. the parameters.

# In[8]:


sol2 = dt.solve(lv_problem.remake(p=[1.0, 1.0, 1.0, 1.0]), t_eval=t_lv)
plot_phase_portrait(sol2.x, labels=["prey", "predator"])


# ## A stochastic differential equation
# Geometric Brownian motion $dX = a X\,dt + b X\,dW$. Each realization differs; a fixed `random_state` makes one reproducible.

# In[9]:


sde = dt.SDEProblem(
    geometric_brownian_drift,
    geometric_brownian_diffusion,
    [0.5],
    (0.0, 1.0),
    p=[1.01, 0.87],
)
t_sde = np.linspace(0, 1, n_sde)
fig, ax = plt.subplots()
for seed in range(5):
    path = dt.solve_sde(sde, t_sde, scheme="euler", random_state=seed)
    ax.plot(path.t, path.x[:, 0], lw=0.8)
ax.plot(t_sde, 0.5 * np.exp(1.01 * t_sde), "k--", label="mean")
ax.set(xlabel="t", ylabel="X")
ax.legend()
