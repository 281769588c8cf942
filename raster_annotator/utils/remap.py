"""Remap functions applied to raster values before color mapping.

Each function maps raw raster values to display-space values. They are
numpy ufunc compositions, so they accept Python scalars and numpy arrays
alike, and they are total over finite input (zero and negatives included).

- ``pseudolog10``: behaves like ``log10`` for ``|x| >> 1`` but stays finite
  and smooth through zero.
- ``symlog10``: symmetric log scaling, zero at zero.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from raster_annotator.core.exceptions import NotFoundError

if TYPE_CHECKING:
    from collections.abc import Callable

    from numpy.typing import ArrayLike

_LN10 = np.log(10.0)


def pseudolog10(x: ArrayLike) -> np.ndarray | np.floating:
    """Return ``asinh(x / 2) / ln(10)``."""
    return np.arcsinh(np.asarray(x, dtype=float) / 2.0) / _LN10


def symlog10(x: ArrayLike) -> np.ndarray | np.floating:
    """Return ``sign(x) * log10(|x| + 1)``."""
    values = np.asarray(x, dtype=float)
    return np.sign(values) * np.log10(np.abs(values) + 1.0)


def identity(x: ArrayLike) -> np.ndarray:
    return np.asarray(x, dtype=float)


# Menu order of the viewer's remap selector; the first entry is the default.
REMAP_FUNCTIONS: dict[str, Callable[[ArrayLike], np.ndarray | np.floating]] = {
    "cbrt": np.cbrt,
    "identity": identity,
    "sqrt": np.sqrt,
    "pseudolog10": pseudolog10,
    "symlog10": symlog10,
}


def get_remap(name: str) -> Callable[[ArrayLike], np.ndarray | np.floating]:
    """Resolve a remap function by its registry name.

    Raises:
        NotFoundError: If *name* is not a registered remap function.
    """
    try:
        return REMAP_FUNCTIONS[name]
    except KeyError:
        available = ", ".join(REMAP_FUNCTIONS)
        raise NotFoundError(
            name,
            f"Unknown remap function {name!r}. Available: {available}",
            stage="remap",
        ) from None


def list_remaps() -> list[str]:
    """Return the registered remap names in menu order."""
    return list(REMAP_FUNCTIONS)
