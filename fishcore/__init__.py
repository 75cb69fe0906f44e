"""Simulation core for a fishing economy game.

This package decides which fish bite, what they are worth, how a bite becomes
a landed or escaped catch, and how sales accumulate toward round goals. It has
no presentation dependencies. Key modules include:

- session: ``FishingSession``, the entry point collaborators talk to
- fish_factory: procedural fish stats and pricing
- fish_pool: per-species instance pools
- catch_socket / catch_resolution: acceptance and fight resolution
- spawn_manager: the bite loop
- level_manager / sell_station: round economy and selling
- util.rng: the injectable random source

Design note: this module exposes a small, explicit public API via ``__all__``.
Use direct imports from submodules for everything else.
"""

from fishcore.config.session_config import SessionConfig
from fishcore.session import FishingSession
from fishcore.util.rng import RNGService

# Public API of the core package. Keep this list intentionally small.
__all__ = [
    "FishingSession",
    "RNGService",
    "SessionConfig",
]
