"""Session store and cookie handler protocols."""
