"""Git hook management."""
