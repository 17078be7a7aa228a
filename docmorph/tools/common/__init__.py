"""Shared tool interfaces and the plugin registry."""
