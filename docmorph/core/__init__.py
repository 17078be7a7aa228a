"""Core primitives shared by DocMorph tools."""
