"""Configuration loading, default locations and derived runtime settings."""
