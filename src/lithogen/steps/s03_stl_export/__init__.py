"""Step 03: STL export."""
