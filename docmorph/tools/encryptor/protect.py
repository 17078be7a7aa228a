"""Password-protect a document."""

from __future__ import annotations

from ...core.container import DocumentContainer
from ...core.progress import ProgressCallback, ProgressReporter
from ...core.utils import checkpoint, get_logger
from ...exceptions import ValidationError
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool

LOGGER = get_logger("docmorph.tools.protect")


async def protect_document(
    data: bytes,
    password: str,
    *,
    owner_password: str | None = None,
    on_progress: ProgressCallback | None = None,
) -> bytes:
    """Encrypt *data* so that opening it requires *password*.

    When *owner_password* is omitted the user password doubles as the owner
    password.
    """

    reporter = ProgressReporter(on_progress, operation="protect")
    with reporter.track_failures():
        if not password:
            raise ValidationError("A non-empty password is required")

        reporter.emit(10, "Loading document...")
        await checkpoint()
        container = DocumentContainer.open(data)
        if container.encrypted:
            raise ValidationError("Document is already encrypted")

        reporter.emit(50, "Encrypting document...")
        LOGGER.debug(
            "Encrypting %d page(s) with owner password %s",
            container.page_count,
            "<provided>" if owner_password else "<default>",
        )
        container.encrypt(password, owner_password=owner_password)
        await checkpoint()

        reporter.emit(80, "Saving document...")
        result = container.save()
        reporter.complete("Document protected")
    return result


@register_tool("protect")
class ProtectTool(BaseTool):
    name = "protect"

    async def run(self) -> bytes:
        context = self.context
        result = await protect_document(
            context.source.data,
            context.config.get("password", ""),
            owner_password=context.config.get("owner_password"),
            on_progress=context.on_progress,
        )
        context.resources["result"] = result
        return result


__all__ = ["protect_document", "ProtectTool"]
