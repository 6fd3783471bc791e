"""Plant management HTTP layer."""
