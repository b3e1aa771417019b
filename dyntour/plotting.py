"""Matplotlib helpers for trajectories, model comparisons and training."""
import matplotlib.pyplot as plt
import numpy as np


def _axes(ax, projection=None):
    if ax is not None:
        return ax
    fig = plt.figure()
    return fig.add_subplot(111, projection=projection)


def plot_trajectory(t, x, labels=None, ax=None, **kwargs):
    """Every state of ``x`` (n_samples, n_states) against time."""
    ax = _axes(ax)
    x = np.asarray(x).reshape(len(t), -1)
    for i in range(x.shape[1]):
        label = labels[i] if labels is not None else f"x{i}"
        ax.plot(t, x[:, i], label=label, **kwargs)
    ax.set(xlabel="t")
    ax.legend()
    return ax


def plot_phase_portrait(x, labels=None, ax=None, **kwargs):
    """Phase portrait of a two- or three-dimensional trajectory."""
    x = np.asarray(x)
    if x.shape[1] not in (2, 3):
        raise ValueError("Phase portraits need two or three states")
    labels = labels if labels is not None else ["x0", "x1", "x2"]
    if x.shape[1] == 3:
        ax = _axes(ax, projection="3d")
        ax.plot(x[:, 0], x[:, 1], x[:, 2], **kwargs)
        ax.set(xlabel=labels[0], ylabel=labels[1], zlabel=labels[2])
    else:
        ax = _axes(ax)
        ax.plot(x[:, 0], x[:, 1], **kwargs)
        ax.set(xlabel=labels[0], ylabel=labels[1])
    return ax


def plot_comparison(t, x_true, x_model, labels=None, axs=None):
    """Data against a model, one panel per state.

    ``x_model`` may be shorter than ``x_true`` if its simulation diverged.
    """
    x_true = np.asarray(x_true)
    x_model = np.asarray(x_model)
    n_states = x_true.shape[1]
    if axs is None:
        _, axs = plt.subplots(n_states, 1, sharex=True, figsize=(7, 2.5 * n_states))
    axs = np.atleast_1d(axs)
    for i in range(n_states):
        name = labels[i] if labels is not None else f"x{i}"
        axs[i].plot(t, x_true[:, i], "k", label="data")
        axs[i].plot(t[: len(x_model)], x_model[:, i], "r--", label="model")
        axs[i].set(ylabel=name)
        axs[i].legend()
    axs[-1].set(xlabel="t")
    return axs


def plot_loss_history(losses, ax=None):
    """Training loss per iteration on a log scale."""
    ax = _axes(ax)
    ax.semilogy(np.arange(len(losses)), losses)
    ax.set(xlabel="iteration", ylabel="loss")
    return ax


def plot_orbit_diagram(mu, orbit, ax=None, **kwargs):
    """Scatter the output of :func:`dyntour.chaos.orbit_diagram`."""
    ax = _axes(ax)
    kws = {"s": 0.1, "c": "k", "alpha": 0.5}
    kws.update(kwargs)
    ax.scatter(np.ravel(mu), np.ravel(orbit), **kws)
    ax.set(xlabel="parameter", ylabel="x")
    return ax
