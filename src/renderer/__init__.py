"""Parallel stripe rendering, progress reporting and image output."""
