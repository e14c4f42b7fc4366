"""Configuration: settings, enums and default tables."""
