"""Runtime layer: REST transport and batched fetching."""
