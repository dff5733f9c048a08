"""Utility helpers for hdkey."""
