"""Configuration for the library API."""
