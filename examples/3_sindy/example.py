#!/usr/bin/env python
# coding: utf-8
# # Discovering equations from data
# Sparse Identification of Nonlinear Dynamics (SINDy) looks for a vector field that is a sparse linear combination of candidate functions,
#
# $$ \dot X \approx \Theta(X)\Xi, $$
#
# where the columns of $\Theta(X)$ are a fixed basis (monomials, sines, cosines, ...) evaluated on the data and $\Xi$ is a sparse coefficient matrix. The regression is done by [PySINDy](https://github.com/dynamicslab/pysindy); here we only choose the basis, fit, re-simulate the discovered model and compare it with the truth.
#
# The workflow is iterative: fit a model, simulate it, compare against data, refine the basis or the sparsity threshold.
# In[1]:
import matplotlib.pyplot as plt
import numpy as np
import pysindy as ps

import dyntour as dt
from dyntour.plotting import plot_comparison
from dyntour.utils import lotka_volterra

if __name__ != "testing":
    n_samples = 1000
    thresholds = np.linspace(0.05, 1.0, 20)
else:
    n_samples = 200
    thresholds = [0.1, 0.5]

plt.ion()


# ## Data
# A Lotka-Volterra trajectory with $p = (1.5, 1, 3, 1)$. Because we know the true vector field, we also have ideal derivatives.

# In[2]:


p = [1.5, 1.0, 3.0, 1.0]
t = np.linspace(0, 10, n_samples)
problem = dt.ODEProblem(lotka_volterra, [1.0, 1.0], (0.0, 10.0), p=p)
data = dt.solve(problem, t_eval=t)
x_dot_ideal = np.array([lotka_volterra(ti, xi, p) for ti, xi in zip(t, data.x)])


# ## Ideal derivatives
# With exact derivatives and a quadratic polynomial basis, sparse regression recovers the four terms of the model.

# In[3]:


model = dt.ModelDiscovery(threshold=0.1, degree=2, feature_names=["x", "y"])
model.fit(data.x, t, x_dot=x_dot_ideal)
model.print()
print("active terms:", model.complexity)


# ## Estimated derivatives
# In practice derivatives must be estimated from the data. Finite differences work on clean data; smoothed finite differences are more robust to noise.

# In[4]:


model_fd = dt.ModelDiscovery(
    threshold=0.1,
    degree=2,
    differentiation_method=ps.SmoothedFiniteDifference(),
    feature_names=["x", "y"],
)
model_fd.fit(data.x, t)
model_fd.print()


# ## A larger basis
# Adding trigonometric terms enlarges the search space. The thresholding still has to prune everything except the true terms.

# In[5]:


model_trig = dt.ModelDiscovery(
    threshold=0.1, degree=3, n_frequencies=1, feature_names=["x", "y"]
)
model_trig.fit(data.x, t, x_dot=x_dot_ideal)
model_trig.print()


# ## Simulate and compare
# Re-simulating the discovered model from the same initial condition is deterministic; its agreement with the data is the only check on the model.

# In[6]:


x_sim = model_fd.simulate(data.x0, t)
print(dt.compare_trajectories(data.x, x_sim))
plot_comparison(t, data.x, x_sim, labels=["prey", "predator"])


# ## Refine
# Too small a threshold keeps spurious terms, too large a threshold drops real ones. Sweeping it and ranking the candidates by simulation error makes the trade-off visible.

# In[7]:


results, best = dt.threshold_sweep(
    data.x, t, thresholds, degree=2, feature_names=["x", "y"]
)
fig, ax = plt.subplots()
ax.semilogy(
    [r["complexity"] for r in results], [r["mse"] + 1e-16 for r in results], "o"
)
ax.set(xlabel="active terms", ylabel="trajectory MSE")
print("best threshold:", best["threshold"])
best["model"].print()
