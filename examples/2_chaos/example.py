#!/usr/bin/env python
# coding: utf-8
# # Chaos analysis
# Chaotic systems are deterministic yet sensitive to initial conditions: nearby trajectories separate exponentially fast, at a rate given by the largest Lyapunov exponent $\lambda_1$. This notebook samples a few classic systems and hands the resulting time series to the estimators of [nolds](https://github.com/CSchoel/nolds):
#
#  * `lyap_r` (Rosenstein et al.) for $\lambda_1$;
#  * `lyap_e` (Eckmann et al.) for the first few exponents of the spectrum;
#  * `sampen` for the sample entropy;
#  * `corr_dim` for the Grassberger-Procaccia correlation dimension.
# In[1]:
import matplotlib.pyplot as plt
import numpy as np

import dyntour as dt
from dyntour.chaos import correlation_dimension
from dyntour.chaos import lyapunov
from dyntour.chaos import lyapunov_spectrum
from dyntour.chaos import orbit_diagram
from dyntour.chaos import sample_entropy
from dyntour.plotting import plot_orbit_diagram
from dyntour.plotting import plot_phase_portrait
from dyntour.utils import henon_map
from dyntour.utils import logistic_map
from dyntour.utils import lorenz

if __name__ != "testing":
    T = 100.0
    n_map = 5000
    n_mu = 1000
else:
    T = 20.0
    n_map = 1000
    n_mu = 50

plt.ion()


# ## Sensitive dependence on initial conditions
# Two Lorenz trajectories starting $10^{-8}$ apart.

# In[2]:


integrator_kws = {"rtol": 1e-10, "atol": 1e-10}
lorenz_system = dt.ContinuousDynamicalSystem(
    lorenz, [1.0, 1.0, 1.0], p=[10, 28, 8 / 3], integrator_kws=integrator_kws
)
nearby = dt.ContinuousDynamicalSystem(
    lorenz, [1.0 + 1e-8, 1.0, 1.0], p=[10, 28, 8 / 3], integrator_kws=integrator_kws
)
tr1 = lorenz_system.trajectory(T, dt=0.01, Ttr=10.0)
tr2 = nearby.trajectory(T, dt=0.01, Ttr=10.0)
distance = np.linalg.norm(tr1.x - tr2.x, axis=1)

fig, ax = plt.subplots()
ax.semilogy(tr1.t, distance)
ax.set(xlabel="t", ylabel="separation")
plot_phase_portrait(tr1.x, labels=["x", "y", "z"], lw=0.5)


# ## Lyapunov exponents
# For the Lorenz system $\lambda_1 \approx 0.906$. The estimate below comes from the $x$ component alone, with `dt` converting the per-sample rate into a per-time-unit rate.

# In[3]:


lam = lyapunov(lorenz_system, T, dt=0.01, Ttr=10.0, emb_dim=10, fit="poly")
print("largest Lyapunov exponent of Lorenz:", lam)

spectrum = lyapunov_spectrum(lorenz_system, T, dt=0.01, Ttr=10.0, matrix_dim=4)
print("estimated spectrum:", spectrum)


# The Hénon map $x_{n+1} = 1 - a x_n^2 + y_n,\ y_{n+1} = b x_n$ has $\lambda_1 \approx 0.42$ per iteration.

# In[4]:


henon = dt.DiscreteDynamicalSystem(henon_map, [0.0, 0.0], p=[1.4, 0.3])
henon_traj = henon.trajectory(n_map, Ttr=100)
plot_phase_portrait(henon_traj.x, labels=["x", "y"], ls="", marker=".", ms=1)
lam_henon = lyapunov(henon, n_map, Ttr=100, fit="poly")
print("largest Lyapunov exponent of Henon:", lam_henon)


# ## Entropy and dimension
# The sample entropy of a chaotic signal is larger than that of a periodic one, and the correlation dimension of the Hénon attractor is about 1.2.

# In[5]:


t_periodic = np.linspace(0, 20 * np.pi, n_map)
print("sample entropy, sine: ", sample_entropy(np.sin(t_periodic)))
print("sample entropy, Henon:", sample_entropy(henon_traj.x[:, 0]))
dim = correlation_dimension(henon_traj.x[:, 0], emb_dim=2)
print("correlation dimension, Henon:", dim)


# ## Orbit diagram of the logistic map
# Long-term iterates of $x_{n+1} = \mu x_n (1 - x_n)$ against $\mu$ show the period-doubling route to chaos.

# In[6]:


mus = np.linspace(2.5, 4.0, n_mu)
mu, orbit = orbit_diagram(logistic_map, 0.4, mus, n=200, Ttr=500)
plot_orbit_diagram(mu, orbit)
