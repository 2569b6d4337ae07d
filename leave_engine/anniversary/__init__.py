"""Anniversary module — effective work anniversaries."""
