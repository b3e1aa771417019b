from importlib.metadata import PackageNotFoundError
from importlib.metadata import version

try:
    __version__ = version(__name__)
except PackageNotFoundError:
    pass

from . import chaos
from . import discovery
from . import hybrid
from . import plotting
from . import utils
from .chaos import ContinuousDynamicalSystem
from .chaos import DiscreteDynamicalSystem
from .discovery import build_basis
from .discovery import compare_trajectories
from .discovery import ModelDiscovery
from .discovery import threshold_sweep
from .hybrid import HybridModel
from .hybrid import HybridVectorField
from .problems import ODEProblem
from .problems import SDEProblem
from .problems import solve
from .problems import solve_sde
from .problems import Trajectory

__all__ = [
    "ODEProblem",
    "SDEProblem",
    "Trajectory",
    "solve",
    "solve_sde",
    "ContinuousDynamicalSystem",
    "DiscreteDynamicalSystem",
    "ModelDiscovery",
    "build_basis",
    "compare_trajectories",
    "threshold_sweep",
    "HybridModel",
    "HybridVectorField",
    "chaos",
    "discovery",
    "hybrid",
    "plotting",
    "utils",
]
