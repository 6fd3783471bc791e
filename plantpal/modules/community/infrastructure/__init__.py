"""Storage and augmenter providers for the community module."""
