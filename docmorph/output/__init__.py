"""Result delivery for DocMorph operations."""

from __future__ import annotations

from .packaging import DirectorySink, DownloadSink, OutputFile, deliver, pack_archive, package_result

__all__ = ["DirectorySink", "DownloadSink", "OutputFile", "deliver", "pack_archive", "package_result"]
