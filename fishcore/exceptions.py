"""Fishing core exception hierarchy.

The core degrades caller mistakes to logged no-ops (see ``fishcore.result``);
these exceptions are reserved for programming errors inside the core and for
malformed authored data caught at load time.
"""


class FishCoreError(Exception):
    """Root of all fishing-core exceptions."""


class ConfigurationError(FishCoreError):
    """Invalid or missing authored configuration (species, gear, tuning)."""


class LifecycleError(FishCoreError):
    """A fish instance was driven through a transition its lifecycle forbids."""
