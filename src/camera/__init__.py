"""Thin-lens camera: viewport setup, ray generation and pixel shading."""
