"""Cadence - routine scheduling and daily agenda."""
