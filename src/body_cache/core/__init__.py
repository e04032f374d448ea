"""Core configuration, logging, errors and request contracts."""
