"""Domain services - Business logic that doesn't fit in entities."""
