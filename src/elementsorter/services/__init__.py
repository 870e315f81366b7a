"""Diagnostics services (log capture, counters)."""
