"""Stateless helper functions shared by the viewer and the core."""
