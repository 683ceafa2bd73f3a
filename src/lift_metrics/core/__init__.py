"""Pure derived-metrics engine."""
