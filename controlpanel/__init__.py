"""Control panel system settings application."""
