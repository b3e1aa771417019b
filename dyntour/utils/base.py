import numpy as np
from sklearn.utils.validation import check_array


def flatten_2d_tall(x):
    return x.reshape(x.size // x.shape[-1], x.shape[-1])


def validate_state(x0):
    """Coerce an initial condition into a 1D float array.

    Args:
        x0: initial state, a scalar or a sequence of numbers.

    Returns:
        x0 as a 1D float array.
    """
    x0 = np.atleast_1d(np.asarray(x0, dtype=float))
    if x0.ndim != 1:
        raise ValueError(f"State must be one-dimensional, got shape {x0.shape}")
    return x0


def validate_tspan(tspan):
    """Check that a time span is a ``(t0, t1)`` pair.

    Args:
        tspan: start and end time.

    Returns:
        tspan as a tuple of two floats.
    """
    if np.ndim(tspan) != 1 or len(tspan) != 2:
        raise ValueError("tspan must be a (t0, t1) pair")
    t0, t1 = (float(ti) for ti in tspan)
    if t0 == t1:
        raise ValueError("tspan must have distinct start and end times")
    return t0, t1


def validate_input(x, t=None):
    """Forces trajectory data to have compatible dimensions, if possible.

    Args:
        x: array of states (measured coordinates across time)
        t: time values for the states, or None to skip the time checks.

    Returns:
        x as 2D array, with time dimension on first axis and coordinate
        index on second axis.
    """
    if not isinstance(x, np.ndarray):
        raise ValueError("x must be array-like")
    elif x.ndim == 1:
        x = x.reshape(-1, 1)
    x = flatten_2d_tall(x)
    check_array(x, ensure_all_finite=False)

    if t is not None:
        t = np.asarray(t)
        if t.ndim != 1 or len(t) != x.shape[0]:
            raise ValueError("Length of t should match x.shape[0].")
        if not np.all(t[:-1] < t[1:]):
            raise ValueError("Values in t should be in strictly increasing order.")

    return x
