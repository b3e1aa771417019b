import numpy as np
import numpy.typing as npt

FloatDType = np.dtype[np.floating[npt.NBitBase]]
Float1D = np.ndarray[tuple[int], FloatDType]
Float2D = np.ndarray[tuple[int, int], FloatDType]
