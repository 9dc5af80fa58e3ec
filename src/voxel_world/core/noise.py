"""Seeded hash noise.

Lattice values come from a SquirrelNoise5-style avalanche hash evaluated with
32-bit wrap-around arithmetic, so results are identical on every platform and
across processes. Smooth fields are built by blending the four lattice values
around a point with smoothstep weights.

Every function accepts Python scalars or array-likes. Scalar inputs return
Python scalars; anything else returns an ``np.ndarray``.
"""

from __future__ import annotations

from typing import Any

import numpy as np

_BIT_NOISE1 = np.uint32(0xD2A80A3F)
_BIT_NOISE2 = np.uint32(0xA884F197)
_BIT_NOISE3 = np.uint32(0x6C736F4B)
_BIT_NOISE4 = np.uint32(0xB79F3ABB)
_BIT_NOISE5 = np.uint32(0x1B56C4F5)
_Z_PRIME = np.uint32(198491317)
_OCTAVE_SEED_STEP = 0x9E3779B9

_UINT32_RANGE = float(2**32)
_BELOW_ONE = np.nextafter(1.0, 0.0)


def _as_seed(seed: int) -> np.uint32:
    return np.uint32(int(seed) & 0xFFFFFFFF)


def _as_lattice(values: Any) -> np.ndarray:
    # int64 -> uint32 wraps negative coordinates modulo 2**32
    return np.atleast_1d(np.asarray(values, dtype=np.int64)).astype(np.uint32)


def _squirrel5(position: np.ndarray, seed: np.uint32) -> np.ndarray:
    with np.errstate(over="ignore"):
        mangled = position * _BIT_NOISE1
        mangled = mangled + seed
        mangled ^= mangled >> np.uint32(9)
        mangled = mangled + _BIT_NOISE2
        mangled ^= mangled >> np.uint32(11)
        mangled = mangled * _BIT_NOISE3
        mangled ^= mangled >> np.uint32(13)
        mangled = mangled + _BIT_NOISE4
        mangled ^= mangled >> np.uint32(15)
        mangled = mangled * _BIT_NOISE5
        mangled ^= mangled >> np.uint32(17)
    return mangled


def _hash_lattice(ix: np.ndarray, iz: np.ndarray, seed: np.uint32) -> np.ndarray:
    with np.errstate(over="ignore"):
        position = ix + _Z_PRIME * iz
    return _squirrel5(position, seed)


def _to_unit(hashed: np.ndarray) -> np.ndarray:
    return hashed.astype(np.float64) / _UINT32_RANGE


def _is_scalar(*values: Any) -> bool:
    return all(np.ndim(value) == 0 for value in values)


def hash_2d(x: Any, z: Any, seed: int) -> Any:
    """Return the raw 32-bit hash of integer lattice point(s) ``(x, z)``."""
    ix, iz = np.broadcast_arrays(_as_lattice(x), _as_lattice(z))
    hashed = _hash_lattice(ix, iz, _as_seed(seed))
    if _is_scalar(x, z):
        return int(hashed[0])
    return hashed


def hash_unit(x: Any, z: Any, seed: int) -> Any:
    """Return the lattice hash of ``(x, z)`` mapped into ``[0, 1)``."""
    ix, iz = np.broadcast_arrays(_as_lattice(x), _as_lattice(z))
    values = _to_unit(_hash_lattice(ix, iz, _as_seed(seed)))
    if _is_scalar(x, z):
        return float(values[0])
    return values


def _smoothstep(t: np.ndarray) -> np.ndarray:
    return t * t * (3.0 - 2.0 * t)


def _lerp(a: np.ndarray, b: np.ndarray, t: np.ndarray) -> np.ndarray:
    return a + (b - a) * t


def _field(xs: np.ndarray, zs: np.ndarray, seed: np.uint32) -> np.ndarray:
    x0 = np.floor(xs)
    z0 = np.floor(zs)
    tx = _smoothstep(xs - x0)
    tz = _smoothstep(zs - z0)

    ix = x0.astype(np.int64)
    iz = z0.astype(np.int64)
    ix0, ix1 = ix.astype(np.uint32), (ix + 1).astype(np.uint32)
    iz0, iz1 = iz.astype(np.uint32), (iz + 1).astype(np.uint32)

    h00 = _to_unit(_hash_lattice(ix0, iz0, seed))
    h10 = _to_unit(_hash_lattice(ix1, iz0, seed))
    h01 = _to_unit(_hash_lattice(ix0, iz1, seed))
    h11 = _to_unit(_hash_lattice(ix1, iz1, seed))

    near = _lerp(h00, h10, tx)
    far = _lerp(h01, h11, tx)
    return np.minimum(_lerp(near, far, tz), _BELOW_ONE)


def _float_inputs(x: Any, z: Any) -> tuple[np.ndarray, np.ndarray]:
    xs = np.atleast_1d(np.asarray(x, dtype=np.float64))
    zs = np.atleast_1d(np.asarray(z, dtype=np.float64))
    return np.broadcast_arrays(xs, zs)


def noise_field(x: Any, z: Any, seed: int) -> Any:
    """Smooth value noise in ``[0, 1)`` at already-scaled coordinates.

    At integer coordinates the field equals :func:`hash_unit` of that lattice
    point; in between, neighbouring lattice values are blended with smoothstep
    weights so the field is continuous.
    """
    xs, zs = _float_inputs(x, z)
    values = _field(xs, zs, _as_seed(seed))
    if _is_scalar(x, z):
        return float(values[0])
    return values


def fractal_field(x: Any, z: Any, seed: int, octaves: int = 1, persistence: float = 0.5) -> Any:
    """Sum ``octaves`` layers of :func:`noise_field`, normalised to ``[0, 1)``.

    Each octave doubles the frequency, scales the amplitude by ``persistence``
    and uses its own seed. A single octave is exactly ``noise_field``.
    """
    xs, zs = _float_inputs(x, z)
    total = np.zeros(xs.shape, dtype=np.float64)
    norm = 0.0
    amplitude = 1.0
    frequency = 1.0
    for octave in range(max(1, int(octaves))):
        octave_seed = _as_seed(int(seed) + octave * _OCTAVE_SEED_STEP)
        total += amplitude * _field(xs * frequency, zs * frequency, octave_seed)
        norm += amplitude
        amplitude *= persistence
        frequency *= 2.0
    values = np.minimum(total / norm, _BELOW_ONE)
    if _is_scalar(x, z):
        return float(values[0])
    return values


__all__ = ["fractal_field", "hash_2d", "hash_unit", "noise_field"]
