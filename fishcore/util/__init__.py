"""Utility helpers shared across the fishing core."""

from fishcore.util.rng import MissingRNGError, RNGService, require_rng_param

__all__ = ["MissingRNGError", "RNGService", "require_rng_param"]
