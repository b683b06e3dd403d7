"""Terminal remote for vizmote."""
