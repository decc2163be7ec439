"""Core package: configuration, credentials, data model and errors."""
