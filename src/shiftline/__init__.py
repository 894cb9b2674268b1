"""Interactive shift-timeline engine for restaurant rostering."""

__version__ = "0.1.0"
