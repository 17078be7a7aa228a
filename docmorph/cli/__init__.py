"""Command line entry points for DocMorph."""
