"""Absence module — extended-absence intervals and their tenure effect."""
