"""Namespace for pluggable DocMorph tools."""

from __future__ import annotations

from .common.pipeline import registry


def load_builtin_plugins() -> None:
    from .merger import merge  # noqa: F401
    from .splitter import split  # noqa: F401
    from .rotator import rotate  # noqa: F401
    from .compressor import compress  # noqa: F401
    from .watermark import watermark  # noqa: F401
    from .encryptor import protect  # noqa: F401
    from .inspector import describe  # noqa: F401
    from .converter import images, office, web_capture  # noqa: F401


__all__ = ["registry", "load_builtin_plugins"]
