"""Waymark test suite."""
