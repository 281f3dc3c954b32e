"""Utility helpers for headgrid."""
