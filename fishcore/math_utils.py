"""Centralized math utilities for the fishing core.

Pure Python helpers: a small Vector3 for positions and velocities handed to
the rendering collaborator, plus the clamping, interpolation and money
rounding used by generation and the round economy.
"""

from __future__ import annotations


class Vector3:
    """A 3D vector for spawn positions and physical state."""

    __slots__ = ("x", "y", "z")

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> None:
        self.x: float = float(x)
        self.y: float = float(y)
        self.z: float = float(z)

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector3):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    def copy(self) -> "Vector3":
        return Vector3(self.x, self.y, self.z)

    @classmethod
    def zero(cls) -> "Vector3":
        return cls(0.0, 0.0, 0.0)

    def __repr__(self) -> str:
        return f"Vector3({self.x}, {self.y}, {self.z})"


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def clamp01(value: float) -> float:
    return clamp(value, 0.0, 1.0)


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation with ``t`` clamped to [0, 1]."""
    t = clamp01(t)
    return a + (b - a) * t


def round_cents(value: float) -> float:
    """Round a euro amount to two decimals (ties to even)."""
    return round(value * 100.0) / 100.0
