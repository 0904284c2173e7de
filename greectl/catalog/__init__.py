"""Packaged settings catalog."""
