"""Step 01: Load image."""
