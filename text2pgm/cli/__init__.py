"""Command-line interface for text2pgm."""
