"""Shared logging, metrics and credential utilities for live events."""
