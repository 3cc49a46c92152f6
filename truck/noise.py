"""
Coherent 3D gradient noise for terrain elevation
"""

from typing import Optional
import numpy as np


def _fade(t: np.ndarray) -> np.ndarray:
    return t * t * t * (t * (t * 6 - 15) + 10)


def _lerp(t: np.ndarray, a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return a + t * (b - a)


def _grad(hash_: np.ndarray, x: np.ndarray, y: np.ndarray, z: np.ndarray) -> np.ndarray:
    """Dot product with one of 12 gradient directions selected by the low 4 bits"""
    h = hash_ & 15
    u = np.where(h < 8, x, y)
    v = np.where(h < 4, y, np.where((h == 12) | (h == 14), x, z))
    return np.where((h & 1) == 0, u, -u) + np.where((h & 2) == 0, v, -v)


class PerlinNoise:
    """Perlin-style noise with a permutation table built once at construction"""

    def __init__(self, seed: Optional[int] = None) -> None:
        """
        Initialize noise generator

        Args:
            seed: RNG seed for the permutation table; None draws fresh entropy
                once, after which samples stay stable for the life of the object
        """
        self.seed = seed
        rng = np.random.default_rng(seed)
        perm = rng.permutation(256)
        self.permutation = np.concatenate([perm, perm]).astype(np.int64)
        self.permutation.flags.writeable = False

    def sample(self, x, y, z):
        """
        Evaluate noise at one point or at broadcast arrays of points

        Args:
            x, y, z: Coordinates (scalars or numpy arrays of a common shape)

        Returns:
            Noise value(s) in roughly [-1, 1]; a float for scalar input
        """
        scalar = np.ndim(x) == 0 and np.ndim(y) == 0 and np.ndim(z) == 0
        x, y, z = np.broadcast_arrays(
            np.asarray(x, dtype=float), np.asarray(y, dtype=float), np.asarray(z, dtype=float)
        )
        p = self.permutation

        xf, yf, zf = np.floor(x), np.floor(y), np.floor(z)
        X = xf.astype(np.int64) & 255
        Y = yf.astype(np.int64) & 255
        Z = zf.astype(np.int64) & 255
        x, y, z = x - xf, y - yf, z - zf
        u, v, w = _fade(x), _fade(y), _fade(z)

        A = p[X] + Y
        AA = p[A] + Z
        AB = p[A + 1] + Z
        B = p[X + 1] + Y
        BA = p[B] + Z
        BB = p[B + 1] + Z

        result = _lerp(
            w,
            _lerp(
                v,
                _lerp(u, _grad(p[AA], x, y, z), _grad(p[BA], x - 1, y, z)),
                _lerp(u, _grad(p[AB], x, y - 1, z), _grad(p[BB], x - 1, y - 1, z)),
            ),
            _lerp(
                v,
                _lerp(u, _grad(p[AA + 1], x, y, z - 1), _grad(p[BA + 1], x - 1, y, z - 1)),
                _lerp(u, _grad(p[AB + 1], x, y - 1, z - 1), _grad(p[BB + 1], x - 1, y - 1, z - 1)),
            ),
        )
        if scalar:
            return float(result)
        return result
