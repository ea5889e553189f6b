"""Helper utilities: console output, filesystem access and project config."""
