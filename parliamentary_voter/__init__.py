"""Domain core of the parliamentary voter application."""
