"""
Format Service - Run the formatter for a document and turn its output into edits
"""

from __future__ import annotations

import asyncio
import uuid

from models.format import FormatRequest, FormatResponse, FormatStatus
from models.invocation import InvocationResult, InvocationStatus
from services.bin_resolver import BinPathCache
from services.config_manager import ConfigManager
from services.edit_generator import EditGenerator
from services.formatter_invoker import FormatterInvoker
from services.output_channel import OutputChannel
from services.placeholders import PlaceholderContext


class FormatterError(Exception):
    """The formatter ran but its output cannot be used"""

    def __init__(self, message: str, result: InvocationResult | None = None):
        super().__init__(message)
        self.result = result


class FormatCancelledError(Exception):
    """A format request was cancelled before the formatter finished"""


class DuplicateRequestError(Exception):
    """A format request with the same id is still running"""


class FormatService:
    """Coordinate configuration, formatter invocation and edit generation"""

    def __init__(
        self,
        config_manager: ConfigManager,
        bin_cache: BinPathCache | None = None,
        output_channel: OutputChannel | None = None,
    ):
        self.config_manager = config_manager
        self.bin_cache = bin_cache or BinPathCache()
        self.output_channel = output_channel or OutputChannel("Openscad-Format")
        self.edit_generator = EditGenerator()
        self._inflight: dict[str, asyncio.Task] = {}
        self._cancelled: set[str] = set()

    def create_invoker(self, workspace_root: str | None = None) -> FormatterInvoker:
        """Build an invoker from the current configuration"""
        config = self.config_manager.get_config()
        context = PlaceholderContext(workspace_root=workspace_root)
        return FormatterInvoker(
            executable=self.config_manager.get_executable_path(context),
            config_path=self.config_manager.get_config_path(context),
            timeout=config.get("timeout"),
            bin_cache=self.bin_cache,
        )

    def supports(self, language: str) -> bool:
        languages = self.config_manager.get_config().get("languages") or []
        return language.lower() in {lang.lower() for lang in languages}

    async def format_document(self, request: FormatRequest) -> FormatResponse:
        """Format the document and return the edits that produce the result"""
        request_id = request.request_id or str(uuid.uuid4())

        if not self.supports(request.language):
            return FormatResponse(
                request_id=request_id,
                file_path=request.file_path,
                status=FormatStatus.SKIPPED,
                message=f"Language '{request.language}' is not handled by the formatter",
            )

        if request.is_dirty:
            # Editor saves, then asks again
            return FormatResponse(
                request_id=request_id,
                file_path=request.file_path,
                status=FormatStatus.NEEDS_SAVE,
                message="Save the document before formatting",
            )

        if request_id in self._inflight:
            raise DuplicateRequestError(f"Request '{request_id}' is already running")

        invoker = self.create_invoker(request.workspace_root)
        task = asyncio.create_task(
            invoker.run(
                request.content,
                request.file_path,
                is_untitled=request.is_untitled,
                workspace_root=request.workspace_root,
            )
        )
        self._inflight[request_id] = task

        try:
            result = await task
        except asyncio.CancelledError:
            if request_id in self._cancelled:
                raise FormatCancelledError("Cancellation requested") from None
            raise
        finally:
            self._inflight.pop(request_id, None)
            self._cancelled.discard(request_id)

        return self._handle_result(request, request_id, result)

    def _handle_result(
        self,
        request: FormatRequest,
        request_id: str,
        result: InvocationResult,
    ) -> FormatResponse:
        if result.status == InvocationStatus.NOT_FOUND:
            print(f"[FormatService] {result.message}")
            return FormatResponse(
                request_id=request_id,
                file_path=request.file_path,
                status=FormatStatus.UNAVAILABLE,
                message=result.message,
            )

        if result.status == InvocationStatus.DIAGNOSTIC:
            self.output_channel.show()
            self.output_channel.clear()
            self.output_channel.append_line(result.stderr)
            raise FormatterError(result.message or "Cannot format due to syntax errors.", result)

        if result.status == InvocationStatus.PROCESS_ERROR:
            raise FormatterError(result.message or "Formatter failed", result)

        edits = self.edit_generator.compute_edits(request.content, result.stdout)
        return FormatResponse(
            request_id=request_id,
            file_path=request.file_path,
            status=FormatStatus.FORMATTED if edits else FormatStatus.UNCHANGED,
            edits=edits,
        )

    def cancel(self, request_id: str) -> bool:
        """Cancel an in-flight request; False if nothing is running under that id"""
        task = self._inflight.get(request_id)
        if task is None or task.done():
            return False
        self._cancelled.add(request_id)
        task.cancel()
        return True

    async def cancel_all(self) -> int:
        """Cancel every in-flight request and wait for the formatters to be reaped"""
        tasks = [
            self._inflight[request_id]
            for request_id in list(self._inflight)
            if self.cancel(request_id)
        ]
        await asyncio.gather(*tasks, return_exceptions=True)
        return len(tasks)

    @property
    def inflight_count(self) -> int:
        return len(self._inflight)


_format_service: FormatService | None = None


def get_format_service(config_manager: ConfigManager | None = None) -> FormatService:
    """Get the shared FormatService, creating it on first use"""
    global _format_service
    if _format_service is None:
        _format_service = FormatService(config_manager or ConfigManager.get_instance())
    return _format_service


def reset_format_service():
    """Drop the shared FormatService"""
    global _format_service
    _format_service = None
