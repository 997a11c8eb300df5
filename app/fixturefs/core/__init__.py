"""Configuration and path management for fixturefs."""
