"""Nested tab groups with a parking lot for collapsed sub-groups."""
