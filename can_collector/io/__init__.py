"""I/O layer: artifact schemas and output path conventions."""
