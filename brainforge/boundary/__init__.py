"""Boundary layer: database persistence and external identity providers."""
