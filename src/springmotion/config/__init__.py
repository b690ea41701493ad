"""Configuration constants for springmotion."""
