"""Configuration package for the fishing core.

Tuning constants live in per-concern modules (fish generation, spawning,
catch resolution, round economy, default species data) and are gathered into
dataclasses by ``session_config``.
"""
