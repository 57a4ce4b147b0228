"""Compatibility scoring engine and score cache for the Accord discovery feed."""

__version__ = "0.1.0"
