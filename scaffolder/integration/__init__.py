"""Source-control integration configuration."""
