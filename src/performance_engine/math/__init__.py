"""Numerical models: load, readiness, aerobic capacity, evolution, prediction."""
