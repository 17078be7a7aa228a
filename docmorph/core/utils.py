"""Utilities shared by DocMorph tools."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path, PurePath

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
    return logger


def set_log_level(level: int | str) -> None:
    """Apply *level* to every logger created under the ``docmorph`` namespace."""

    manager = logging.Logger.manager
    for name in list(manager.loggerDict):
        if name == "docmorph" or name.startswith("docmorph."):
            logging.getLogger(name).setLevel(level)


def resolve_path(path: str | Path | None) -> Path:
    if path is None:
        raise ValueError("Path must not be None")
    return Path(path).expanduser().resolve()


def file_stem(filename: str | None) -> str | None:
    """Return the stem of *filename* with spaces replaced, or ``None``."""

    if not filename:
        return None
    stem = PurePath(filename).stem.strip()
    if not stem:
        return None
    return stem.replace(" ", "_")


async def checkpoint() -> None:
    """Yield control back to the running event loop."""

    await asyncio.sleep(0)


__all__ = ["get_logger", "set_log_level", "resolve_path", "file_stem", "checkpoint"]
