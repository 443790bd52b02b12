"""Command-line tools for typedwire."""
