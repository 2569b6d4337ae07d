"""Balance module — yearly consumption and remaining entitlement."""
