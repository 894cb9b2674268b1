"""Scenario contract and loaders."""
