"""Domain rules: field constraints, input schemas and the canonical sample data."""
