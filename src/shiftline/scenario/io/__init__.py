"""Scenario IO helpers."""

from .loaders import load_gestures, load_scenario, read_csv

__all__ = ["load_scenario", "load_gestures", "read_csv"]
