"""Hittable protocol, spheres and the scene list."""
