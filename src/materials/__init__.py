"""Surface scattering models."""
