"""Layered test-suite configuration and database fixture drivers."""
