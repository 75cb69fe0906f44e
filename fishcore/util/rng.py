"""RNG service for deterministic fishing simulation.

Every sampling decision in the core (fish size and age, bites, species
choice, jackpots, fight outcomes) draws from one ``RNGService`` that is built
by the session and handed to each component. Seeding the service once makes
a whole session reproducible; tests build their own service so they never
share a stream.

Components must not fall back to the global ``random`` module. Use
``require_rng_param`` in constructors so a missing service fails loudly.
"""

import logging
import math
import random
from typing import Optional, Sequence

from fishcore.math_utils import clamp

logger = logging.getLogger(__name__)

# Box-Muller rejection attempts before falling back to the clamped mean.
TRUNCATED_NORMAL_MAX_TRIES = 10


class MissingRNGError(RuntimeError):
    """Raised when an RNG is required but not available.

    This indicates a wiring bug: every component should receive the
    session's RNGService explicitly.
    """


def require_rng_param(rng: Optional["RNGService"], context: str) -> "RNGService":
    """Validate that an RNG parameter was provided, failing loudly if not.

    Args:
        rng: The RNG service that should have been provided
        context: Description of where this is called from (for error messages)

    Returns:
        The validated RNG service

    Raises:
        MissingRNGError: If rng is None

    Example:
        def __init__(self, rng: Optional[RNGService] = None):
            self.rng = require_rng_param(rng, "SpawnManager.__init__")
    """
    if rng is None:
        raise MissingRNGError(f"RNG required: {context}. Pass the session RNGService explicitly.")
    return rng


class RNGService:
    """Seedable random source with the sampling primitives the core needs.

    Attributes:
        seed_value: The last seed applied, or None for an OS-seeded stream
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed_value: Optional[int] = seed
        self._rng = random.Random(seed)

    def seed(self, seed: int) -> None:
        """Restart the stream from ``seed``."""
        self.seed_value = seed
        self._rng = random.Random(seed)
        logger.info(f"Seeded RNG with {seed}")

    def value(self) -> float:
        """Uniform float in [0, 1)."""
        return self._rng.random()

    def uniform_range(self, min_value: float, max_value: float) -> float:
        """Uniform float between ``min_value`` and ``max_value``."""
        val = self._rng.random() * (max_value - min_value) + min_value
        logger.debug(f"uniform_range({min_value}, {max_value}) => {val}")
        return val

    def chance(self, probability: float) -> bool:
        """Bernoulli trial: True with the given probability."""
        return self._rng.random() < probability

    def weighted_choice_index(self, weights: Sequence[float]) -> int:
        """Pick an index with probability proportional to its weight.

        Negative weights count as zero. The draw is uniform over the
        cumulative sum and the first index whose cumulative weight reaches
        the draw wins, so ties go to the earliest index.

        Returns:
            The chosen index, or -1 if the total weight is not positive
        """
        total = sum(max(0.0, w) for w in weights)
        if total <= 0.0:
            logger.warning("weighted_choice_index: total weight <= 0")
            return -1

        roll = self._rng.random() * total
        acc = 0.0
        for i, weight in enumerate(weights):
            acc += max(0.0, weight)
            if roll <= acc:
                logger.debug(f"weighted_choice_index: roll={roll}, chosen={i}")
                return i

        # Floating point overrun on the last cumulative step.
        logger.debug(f"weighted_choice_index fallback, returning last index {len(weights) - 1}")
        return len(weights) - 1

    def truncated_normal(self, mean: float, sd: float, min_value: float, max_value: float) -> float:
        """Normal sample restricted to [min_value, max_value].

        Samples with Box-Muller and rejects out-of-range values up to
        ``TRUNCATED_NORMAL_MAX_TRIES`` times. If every try misses, the mean
        clamped into range is returned. That fallback biases the
        distribution toward the mean when the window is narrow; it is kept
        as a known approximation.
        """
        if sd <= 0.0:
            logger.debug(f"truncated_normal sd<=0 returning clamped mean {mean}")
            return clamp(mean, min_value, max_value)

        for _ in range(TRUNCATED_NORMAL_MAX_TRIES):
            u1 = 1.0 - self._rng.random()
            u2 = 1.0 - self._rng.random()
            std_normal = math.sqrt(-2.0 * math.log(u1)) * math.sin(2.0 * math.pi * u2)
            sample = mean + sd * std_normal
            if min_value <= sample <= max_value:
                return sample

        logger.debug(f"truncated_normal fallback clamped mean {mean}")
        return clamp(mean, min_value, max_value)

    def __repr__(self) -> str:
        return f"RNGService(seed={self.seed_value})"
