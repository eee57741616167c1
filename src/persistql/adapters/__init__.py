"""Framework adapters for persistql."""
