"""Local network control for Gree air conditioners."""
