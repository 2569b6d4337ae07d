"""Tenure module — effective service time."""
