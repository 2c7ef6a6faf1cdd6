"""Child-process side of the script sandbox.

Runs inside a freshly started process. The script only sees the names
placed in its namespace by ``build_namespace``. Source is checked by
``validate_script`` first, so private and introspection attributes of those
names (function globals, classes, frames) cannot be followed back to the
host modules.
"""

import asyncio
import builtins
import importlib
import inspect
import json
import time
import types
from multiprocessing.connection import Connection
from typing import Any
from urllib.parse import parse_qs, quote, urlencode, urljoin

import httpx

from superpowers.sandbox.policy import validate_script

READY = "ready"
PENDING = "pending"
OK = "ok"
ERROR = "error"

MISSING_MAIN_MESSAGE = "Script must define a main(params) function"

SAFE_BUILTINS = frozenset({
    "abs", "all", "any", "ascii", "bin", "bool", "bytearray", "bytes", "callable",
    "chr", "complex", "dict", "divmod", "enumerate", "filter", "float", "format",
    "frozenset", "hasattr", "hash", "hex", "id", "int", "isinstance",
    "issubclass", "iter", "len", "list", "map", "max", "min", "next", "object",
    "oct", "ord", "pow", "range", "repr", "reversed", "round", "set",
    "slice", "sorted", "str", "sum", "tuple", "zip", "aiter", "anext",
    "property", "staticmethod", "classmethod", "super", "__build_class__",
    # Exceptions scripts commonly raise or catch
    "BaseException", "Exception", "ArithmeticError", "AssertionError",
    "AttributeError", "IndexError", "KeyError", "LookupError", "NotImplementedError",
    "OverflowError", "RuntimeError", "StopIteration", "StopAsyncIteration",
    "TimeoutError", "TypeError", "ValueError", "ZeroDivisionError",
    "NotImplemented", "Ellipsis",
})

# Pure-computation modules only. Modules that evaluate strings or look
# attributes up by name (typing, functools, operator, string) stay out.
ALLOWED_MODULES = frozenset({
    "json", "math", "cmath", "datetime", "calendar", "re", "random",
    "statistics", "decimal", "fractions", "itertools", "collections", "textwrap",
    "uuid", "base64", "hashlib", "hmac", "bisect", "heapq",
})


class Console:
    """``console.log`` style logging, collected and relayed to the host."""

    def __init__(self) -> None:
        self.lines: list[tuple[str, str]] = []

    def _write(self, level: str, *args: Any) -> None:
        self.lines.append((level, " ".join(str(a) for a in args)))

    def log(self, *args: Any) -> None:
        self._write("info", *args)

    info = log

    def debug(self, *args: Any) -> None:
        self._write("debug", *args)

    def warn(self, *args: Any) -> None:
        self._write("warning", *args)

    warning = warn

    def error(self, *args: Any) -> None:
        self._write("error", *args)


def fetch(
    url: str,
    method: str = "GET",
    headers: dict[str, str] | None = None,
    body: str | bytes | None = None,
    json: Any = None,
    timeout: float = 30.0,
) -> httpx.Response:
    """Make an outbound HTTP request."""
    return httpx.request(method, url, headers=headers, content=body, json=json, timeout=timeout)


async def afetch(
    url: str,
    method: str = "GET",
    headers: dict[str, str] | None = None,
    body: str | bytes | None = None,
    json: Any = None,
    timeout: float = 30.0,
) -> httpx.Response:
    """Async variant of ``fetch``."""
    async with httpx.AsyncClient(timeout=timeout) as client:
        return await client.request(method, url, headers=headers, content=body, json=json)


async def gather(*aws: Any) -> list[Any]:
    """Await several awaitables concurrently and return their results."""
    return list(await asyncio.gather(*aws))


_module_views: dict[str, types.SimpleNamespace] = {}


def _module_view(module: types.ModuleType) -> types.SimpleNamespace:
    """Public, non-module attributes of ``module``.

    Allowed modules import others (``uuid`` imports ``os``); the view keeps
    those out of the script's reach.
    """
    view = _module_views.get(module.__name__)
    if view is None:
        view = types.SimpleNamespace(**{
            name: value
            for name, value in vars(module).items()
            if not name.startswith("_") and not isinstance(value, types.ModuleType)
        })
        _module_views[module.__name__] = view
    return view


def _guarded_import(name, globals=None, locals=None, fromlist=(), level=0):
    root = name.partition(".")[0]
    if level != 0 or root not in ALLOWED_MODULES:
        raise ImportError(f"Import of '{name}' is not allowed in scripts")
    return _module_view(importlib.__import__(name, None, None, fromlist, level))


def build_namespace(console: Console) -> dict[str, Any]:
    """Build the only globals a script can see."""
    safe_builtins = {name: getattr(builtins, name) for name in SAFE_BUILTINS}
    safe_builtins["__import__"] = _guarded_import
    safe_builtins["print"] = console.log

    return {
        "__builtins__": safe_builtins,
        "__name__": "__script__",
        "console": console,
        "fetch": fetch,
        "afetch": afetch,
        "sleep": time.sleep,
        "asleep": asyncio.sleep,
        "gather": gather,
        "URL": httpx.URL,
        "urlencode": urlencode,
        "urljoin": urljoin,
        "quote": quote,
        "parse_qs": parse_qs,
    }


def _describe(exc: BaseException) -> str:
    message = str(exc)
    return message if message else type(exc).__name__


async def _resolve(awaitable: Any) -> Any:
    return await awaitable


def run_script_process(conn: Connection, source: str, params: dict[str, Any]) -> None:
    """Process target: execute ``source`` and report over ``conn``.

    Messages are ``(status, payload, console_lines)`` tuples. The host
    watchdog owns every timeout; this side never waits on its own.
    """
    console = Console()
    conn.send((READY, None, []))

    try:
        namespace = build_namespace(console)
        exec(compile(validate_script(source), "<script>", "exec"), namespace)

        entry = namespace.get("main")
        if not callable(entry):
            raise NameError(MISSING_MAIN_MESSAGE)

        result = entry(params)
        if inspect.isawaitable(result):
            conn.send((PENDING, None, console.lines))
            console.lines = []
            result = asyncio.run(_resolve(result))

        conn.send((OK, json.dumps(result), console.lines))
    except Exception as exc:
        conn.send((ERROR, _describe(exc), console.lines))
    finally:
        conn.close()
