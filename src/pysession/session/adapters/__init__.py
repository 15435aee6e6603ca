"""Session adapters — concrete stores and cookie handlers."""
