"""Subprocess spawn/wait primitive."""

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Sequence


@dataclass(frozen=True)
class ProcessOutput:
    """Exit status and raw output of a finished child process."""

    returncode: int | None
    stdout: Any
    stderr: Any

    @property
    def failed(self) -> bool:
        return self.returncode != 0


ProcessInvoker = Callable[[str, Sequence[str]], Awaitable[ProcessOutput]]


def to_text(data: Any) -> str:
    """Normalize captured output: bytes are UTF-8 decoded, None is empty."""
    if data is None:
        return ""
    if isinstance(data, str):
        return data
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data).decode("utf-8", errors="replace")
    return str(data)


async def run_process(program: str, args: Sequence[str]) -> ProcessOutput:
    """
    Run `program` with a discrete argument vector and wait for it to exit.

    Arguments never pass through a shell. No timeout is applied.

    Raises:
        OSError: If the process cannot be spawned
    """
    process = await asyncio.create_subprocess_exec(
        program,
        *args,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    stdout, stderr = await process.communicate()
    return ProcessOutput(returncode=process.returncode, stdout=stdout, stderr=stderr)
