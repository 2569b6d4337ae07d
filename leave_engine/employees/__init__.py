"""Employees module — user records feeding tenure and anniversaries."""
