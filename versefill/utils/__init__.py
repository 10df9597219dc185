"""Utility helpers for versefill."""
