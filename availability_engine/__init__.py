"""Plan and material availability engine."""
