"""HTTP API for the recipe search gateway."""
