"""JSON schemas for greectl documents."""
