"""Fixture application scanned by the discovery tests."""
