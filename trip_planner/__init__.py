"""AI trip planner service."""
