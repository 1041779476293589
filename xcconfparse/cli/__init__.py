"""Command implementations for the xcconfparse CLI."""
