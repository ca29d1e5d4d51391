"""Infrastructure adapters (settings persistence)."""
