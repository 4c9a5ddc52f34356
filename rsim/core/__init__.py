"""Simulation core: sampling, path simulation and statistics."""
