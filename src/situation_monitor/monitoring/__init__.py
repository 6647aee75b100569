"""Alert sinks and logging setup."""
