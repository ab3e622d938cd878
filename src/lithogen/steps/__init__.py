"""Pipeline steps, numbered in execution order."""
