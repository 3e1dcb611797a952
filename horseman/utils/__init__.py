"""Utilities for Horseman."""
