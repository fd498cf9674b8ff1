"""Concrete implementations of the canvas and vision ports."""
