"""Entitlement module — accrual tiers and carryover policy."""
