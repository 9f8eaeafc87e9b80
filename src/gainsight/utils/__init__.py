"""Utility helpers for gainsight."""
