"""Vectors, rays, intervals, random sampling and shared error types."""
