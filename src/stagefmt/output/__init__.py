"""Run reporters — rich terminal output and JSON."""
