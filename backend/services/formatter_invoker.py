"""
Formatter Invoker - Run the external formatter on a document's content
"""

from __future__ import annotations

import asyncio
import os

from models.invocation import InvocationResult, InvocationStatus
from services.bin_resolver import BinPathCache


class FormatterInvoker:
    """Spawn the formatter, feed it the document on stdin and collect its output"""

    def __init__(
        self,
        executable: str,
        config_path: str | None = None,
        timeout: float | None = 30,
        bin_cache: BinPathCache | None = None,
    ):
        self.executable = executable
        self.config_path = config_path
        self.timeout = timeout
        self.bin_cache = bin_cache or BinPathCache()

    def build_args(self, file_path: str) -> list[str]:
        """Command line arguments for a dry run on file_path"""
        args = ["--dry", f"--input={file_path}"]
        if self.config_path:
            args.append(f"--config={self.config_path}")
        return args

    def working_directory(
        self,
        file_path: str,
        is_untitled: bool = False,
        workspace_root: str | None = None,
    ) -> str | None:
        """Directory of the document, or the workspace root for untitled buffers"""
        if is_untitled:
            return workspace_root
        return os.path.dirname(file_path) or workspace_root

    async def run(
        self,
        content: str,
        file_path: str,
        *,
        is_untitled: bool = False,
        workspace_root: str | None = None,
    ) -> InvocationResult:
        """
        Format content with the external executable.

        Cancelling the awaiting task kills the child process and re-raises
        CancelledError, so no partial output ever leaves this method.
        """
        bin_path = self.bin_cache.resolve(self.executable)
        cwd = self.working_directory(file_path, is_untitled, workspace_root)

        try:
            process = await asyncio.create_subprocess_exec(
                bin_path,
                *self.build_args(file_path),
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=cwd,
            )
        except FileNotFoundError:
            return InvocationResult(
                status=InvocationStatus.NOT_FOUND,
                executable=bin_path,
                message=(
                    f"The '{bin_path}' command is not available. Please check your "
                    "executable setting and ensure openscad-format is installed."
                ),
            )
        except OSError as e:
            return InvocationResult(
                status=InvocationStatus.PROCESS_ERROR,
                executable=bin_path,
                message=f"Failed to start formatter: {e}",
            )

        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(content.encode("utf-8")),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            await self._kill(process)
            print(f"[FormatterInvoker] {bin_path} timed out after {self.timeout}s")
            return InvocationResult(
                status=InvocationStatus.PROCESS_ERROR,
                executable=bin_path,
                message=f"Formatter timed out after {self.timeout}s",
            )
        except asyncio.CancelledError:
            await self._kill(process)
            print(f"[FormatterInvoker] Cancelled, killed {bin_path}")
            raise

        stdout_text = stdout.decode("utf-8", errors="replace")
        stderr_text = stderr.decode("utf-8", errors="replace")

        if stderr_text:
            return InvocationResult(
                status=InvocationStatus.DIAGNOSTIC,
                executable=bin_path,
                stdout=stdout_text,
                stderr=stderr_text,
                return_code=process.returncode,
                message="Cannot format due to syntax errors.",
            )

        if process.returncode != 0:
            return InvocationResult(
                status=InvocationStatus.PROCESS_ERROR,
                executable=bin_path,
                stdout=stdout_text,
                return_code=process.returncode,
                message=f"Formatter exited with code {process.returncode}",
            )

        return InvocationResult(
            status=InvocationStatus.SUCCESS,
            executable=bin_path,
            stdout=stdout_text,
            return_code=0,
        )

    async def _kill(self, process: asyncio.subprocess.Process):
        if process.returncode is None:
            try:
                process.kill()
            except ProcessLookupError:
                pass
        # Reap even if cancelled again
        await asyncio.shield(process.wait())
