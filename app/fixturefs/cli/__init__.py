"""Command line interface for fixturefs."""
