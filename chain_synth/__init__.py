"""Deterministic options-chain synthesis and order risk estimates."""

__version__ = "0.1.0"
