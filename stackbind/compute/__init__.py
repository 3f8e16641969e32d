"""Compute service bindings."""
