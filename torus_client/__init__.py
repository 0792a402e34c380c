"""Pygame client package for the Torus Snake project."""
