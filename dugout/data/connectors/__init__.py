"""Provider connectors."""
