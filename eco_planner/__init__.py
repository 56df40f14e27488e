"""Eco Planner: personal carbon footprint estimation and phased eco-action planning."""

__version__ = "0.1.0"
