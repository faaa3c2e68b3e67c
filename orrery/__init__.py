"""Hierarchical spin/orbit animation of celestial bodies."""
