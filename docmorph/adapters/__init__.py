"""Backend adapters used by the transformation tools."""
