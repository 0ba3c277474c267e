"""Core services: paths, settings, theme, logging, history and bundle inspection."""
