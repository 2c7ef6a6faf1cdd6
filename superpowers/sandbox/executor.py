"""Host side of the script sandbox.

Every run gets its own process. A watchdog on the host waits for each phase
of the run and terminates the process when a phase overruns its budget, so a
script that never yields control still cannot hold the caller.
"""

import asyncio
import json
import logging
import multiprocessing
from dataclasses import dataclass
from multiprocessing.connection import Connection
from multiprocessing.process import BaseProcess
from typing import Any, Literal

from superpowers.core.exception import (
    ScriptError,
    ScriptExecutionError,
    ScriptParamsError,
    ScriptTimeoutError,
)
from superpowers.sandbox.runtime import ERROR, OK, PENDING, READY, run_script_process

logger = logging.getLogger(__name__)
script_logger = logging.getLogger("superpowers.sandbox.script")

ERROR_PREFIX = "Error running script: "

# Seconds to wait for a terminated process before killing it.
_TERMINATE_GRACE = 1.0


def parse_script_params(raw: str | dict[str, Any] | None) -> dict[str, Any]:
    """Parse caller-supplied parameters into a parameter object.

    Args:
        raw: A JSON-encoded object, an already decoded dict, or nothing.

    Returns:
        The parameter object. Missing input and JSON values that are not
        objects yield an empty dict.

    Raises:
        ScriptParamsError: If ``raw`` is not valid JSON.
    """
    if raw is None:
        return {}
    if isinstance(raw, dict):
        return raw
    if not raw.strip():
        return {}

    try:
        params = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ScriptParamsError(f"Invalid params JSON: {e}") from e

    if not isinstance(params, dict):
        logger.warning("Script params are not a JSON object, using {}: %r", raw[:100])
        return {}
    return params


@dataclass(frozen=True)
class ScriptSandbox:
    """Runs untrusted script sources with a wall-clock budget.

    The synchronous phase (module body plus the ``main(params)`` call) and,
    when ``main`` returns an awaitable, the asynchronous phase are each
    bounded by ``timeout``. Results are always strings: the JSON encoding of
    the script's return value, or an ``Error running script: ...`` message.

    The sandbox holds no state between runs and can be shared freely.

    Example:
        sandbox = ScriptSandbox(timeout=5)
        result = await sandbox.run("def main(params):\\n    return params['x'] * 2", {"x": 21})
        # '42'
    """

    timeout: float = 50.0
    startup_timeout: float = 10.0
    start_method: Literal["spawn", "forkserver", "fork"] = "spawn"

    async def run(
        self,
        source: str,
        params: dict[str, Any] | None = None,
        script_name: str = "<script>",
    ) -> str:
        """Execute a script and return its serialized result or an error string."""
        try:
            return await asyncio.to_thread(self.execute, source, params or {}, script_name)
        except ScriptError as e:
            logger.info("Script %s failed: %s", script_name, e)
            return f"{ERROR_PREFIX}{e}"

    def execute(self, source: str, params: dict[str, Any], script_name: str = "<script>") -> str:
        """Blocking execution.

        Returns:
            JSON encoding of the script's result.

        Raises:
            ScriptTimeoutError: If a phase overruns its budget.
            ScriptExecutionError: If the script fails or its process dies.
        """
        context = multiprocessing.get_context(self.start_method)
        reader, writer = context.Pipe(duplex=False)
        process = context.Process(
            target=run_script_process,
            args=(writer, source, params),
            name=f"script-{script_name}",
            daemon=True,
        )

        process.start()
        writer.close()
        try:
            status, _ = self._receive(
                reader, process, script_name, self.startup_timeout,
                f"Script process did not start within {self.startup_timeout:g}s",
            )
            if status != READY:
                raise ScriptExecutionError(f"Unexpected sandbox message: {status}")

            status, payload = self._receive(
                reader, process, script_name, self.timeout,
                f"Script execution timed out after {self.timeout:g}s",
            )
            if status == PENDING:
                status, payload = self._receive(
                    reader, process, script_name, self.timeout,
                    f"Script async execution timed out after {self.timeout:g}s",
                )

            if status == OK:
                return payload
            if status == ERROR:
                raise ScriptExecutionError(payload)
            raise ScriptExecutionError(f"Unexpected sandbox message: {status}")
        finally:
            reader.close()
            self._stop(process)

    def _receive(
        self,
        reader: Connection,
        process: BaseProcess,
        script_name: str,
        budget: float,
        timeout_message: str,
    ) -> tuple[str, Any]:
        """Wait up to ``budget`` seconds for the next message from the child."""
        if not reader.poll(budget):
            raise ScriptTimeoutError(timeout_message)

        try:
            status, payload, console_lines = reader.recv()
        except EOFError:
            process.join(_TERMINATE_GRACE)
            raise ScriptExecutionError(
                f"Script process exited without a result (exit code {process.exitcode})"
            ) from None

        for level, line in console_lines:
            script_logger.log(logging.getLevelName(level.upper()), "[%s] %s", script_name, line)
        return status, payload

    @staticmethod
    def _stop(process: BaseProcess) -> None:
        """Make sure the child is gone; residual async work is abandoned."""
        if process.is_alive():
            process.terminate()
            process.join(_TERMINATE_GRACE)
            if process.is_alive():
                process.kill()
        process.join(_TERMINATE_GRACE)
        if process.exitcode is not None:
            process.close()
