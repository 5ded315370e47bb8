"""Campus Hub API package."""
