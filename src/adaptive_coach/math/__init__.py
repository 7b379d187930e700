"""Pure load and readiness arithmetic."""
