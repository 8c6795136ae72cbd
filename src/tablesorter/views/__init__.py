"""Qt presentation adapters (requires PyQt6)."""
