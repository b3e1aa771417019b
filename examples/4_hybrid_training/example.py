#!/usr/bin/env python
# coding: utf-8
# # Hybrid models: known physics plus a neural network
# Often part of a model is known and part is not. A hybrid (or universal) differential equation keeps the known terms and lets a neural network stand in for the rest:
#
# $$ \dot x = f_{\text{known}}(x) + \mathrm{NN}_\theta(x). $$
#
# The network weights $\theta$ are fit by simulating the hybrid model with [torchdiffeq](https://github.com/rtqichen/torchdiffeq), comparing against observations and letting a `torch.optim` optimizer minimize the squared error. Once trained, the network output can be handed to SINDy to turn the learned terms back into equations.
# In[1]:
import matplotlib.pyplot as plt
import numpy as np
import torch

import dyntour as dt
from dyntour.hybrid import lotka_volterra_known_terms
from dyntour.hybrid import mlp
from dyntour.plotting import plot_comparison
from dyntour.plotting import plot_loss_history
from dyntour.problems import sample
from dyntour.utils import lotka_volterra

if __name__ != "testing":
    adam_iter = 500
    lbfgs_iter = 50
    n_samples = 40
else:
    adam_iter = 3
    lbfgs_iter = 1
    n_samples = 10

torch.manual_seed(0)
plt.ion()


# ## Noisy observations
# Lotka-Volterra data with 5% measurement noise.

# In[2]:


p = [1.5, 1.0, 3.0, 1.0]
t = np.linspace(0, 3, n_samples)
problem = dt.ODEProblem(lotka_volterra, [1.0, 1.0], (0.0, 3.0), p=p)
observed = sample(problem, t, noise=0.05, random_state=1234)
truth = dt.solve(problem, t_eval=t)


# ## The hybrid model
# We pretend to know only the growth of the prey, $\alpha x$, and the decay of the predators, $-\gamma y$. The interaction terms $-\beta x y$ and $\delta x y$ are left to a small network.

# In[3]:


network = mlp(2, 2, width=16, depth=2)
field = dt.HybridVectorField(network, known=lotka_volterra_known_terms(p))
model = dt.HybridModel(field, observed.x[0], t, method="dopri5")
print("initial loss:", model.loss(observed.x).item())


# ## Training
# Adam first, then LBFGS to polish. Every iteration records the loss before its update; the history accumulates over both calls.

# In[4]:


def callback(iteration, loss):
    return not np.isfinite(loss)


model.fit(
    observed.x, max_iter=adam_iter, optimizer="adam", step_size=0.01, callback=callback
)
model.fit(observed.x, max_iter=lbfgs_iter, optimizer="lbfgs", callback=callback)
plot_loss_history(model.loss_history_)
plot_comparison(t, observed.x, model.simulate(), labels=["prey", "predator"])


# ## How good is the learned term?
# The true missing terms are $(-\beta x y,\ \delta x y)$.

# In[5]:


x_dense = dt.solve(problem, t_eval=np.linspace(0, 3, 200)).x
learned = model.missing_terms(x_dense)
ideal = np.column_stack(
    (-p[1] * x_dense[:, 0] * x_dense[:, 1], p[3] * x_dense[:, 0] * x_dense[:, 1])
)
fig, axs = plt.subplots(2, 1, sharex=True)
for i, name in enumerate(["prey", "predator"]):
    axs[i].plot(ideal[:, i], "k", label="true")
    axs[i].plot(learned[:, i], "r--", label="network")
    axs[i].set(ylabel=name)
    axs[i].legend()


# ## From network back to equations
# Sparse regression on the network output, using the states as inputs and the learned terms as targets.

# In[6]:


recovered = dt.ModelDiscovery(threshold=0.1, degree=2, feature_names=["x", "y"])
recovered.fit(x_dense, np.linspace(0, 3, 200), x_dot=learned)
recovered.print()
print(dt.compare_trajectories(ideal, learned))
