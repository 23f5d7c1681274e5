from __future__ import annotations

import importlib
import inspect
import json
import logging
import pkgutil
import time
from types import ModuleType
from typing import Any, Callable, Iterable, List, Set, get_type_hints

from pydantic_core import to_jsonable_python

from .client import DatahubClient
from .errors import error_text
from .observability import (
    bind_request_id,
    elapsed_ms,
    log_event,
    unbind_request_id,
)

log = logging.getLogger("datahub_mcp.core.registry")

TOOL_PREFIX = "datahub_"


# --- Discovery helpers ----------------------------------------------------- #


def discover_tool_modules(
    package_name: str = "datahub_mcp.core.tools",
) -> List[ModuleType]:
    """Import all modules under the given tools package, skipping failures."""
    modules: List[ModuleType] = []
    base_pkg = importlib.import_module(package_name)

    for finder in pkgutil.iter_modules(base_pkg.__path__, base_pkg.__name__ + "."):
        name = finder.name
        if name.rsplit(".", 1)[-1].startswith("_"):
            continue
        try:
            module = importlib.import_module(name)
            modules.append(module)
        except Exception as exc:  # pragma: no cover - logged, not fatal
            log.error("Failed importing tool module %s: %s", name, exc)
            continue

    return modules


def iter_tool_functions(module: ModuleType) -> Iterable[Callable]:
    """Yield functions that satisfy the tool convention."""
    for _, func in inspect.getmembers(module, inspect.iscoroutinefunction):
        if func.__name__.startswith("_"):
            continue
        if func.__module__ != module.__name__:
            # Skip imported functions
            continue

        params = list(inspect.signature(func).parameters.values())
        if not params or params[0].name != "client":
            log.debug(
                "Skipping %s.%s: first parameter must be 'client'",
                module.__name__,
                func.__name__,
            )
            continue

        yield func


def tool_name(func: Callable) -> str:
    return TOOL_PREFIX + func.__name__


# --- Wrapping / registration ---------------------------------------------- #


def render_result(result: Any) -> str:
    """Serialize a tool result (models use their camelCase aliases) as JSON text."""
    return json.dumps(to_jsonable_python(result, by_alias=True, exclude_none=True))


def _wrap_tool(
    func: Callable, client_provider: Callable[[], DatahubClient]
) -> Callable:
    """
    Return a wrapper that injects client and hides it from the signature.
    The wrapper is the error boundary: failures come back as {"error": ...}.
    """
    name = tool_name(func)
    original_sig = inspect.signature(func)
    # include_extras keeps Annotated[..., Field(...)] descriptions and hints
    type_hints = get_type_hints(func, include_extras=True)

    new_params = []
    for i, (param_name, param) in enumerate(original_sig.parameters.items()):
        if i == 0 and param_name == "client":
            continue  # drop injected client
        ann = type_hints.get(param_name, param.annotation)
        new_params.append(param.replace(annotation=ann))

    new_sig = inspect.Signature(parameters=new_params, return_annotation=str)

    async def wrapped(*args, **kwargs) -> str:
        token = bind_request_id()
        start = time.perf_counter()
        try:
            client = client_provider()
            result = await func(client, *args, **kwargs)
            text = render_result(result)
        except Exception as exc:
            log_event(
                "tool_call",
                tool=name,
                status="error",
                error_type=type(exc).__name__,
                duration_ms=elapsed_ms(start),
            )
            log.warning("Tool %s failed: %s", name, exc)
            return error_text(exc)
        else:
            log_event(
                "tool_call",
                tool=name,
                status="ok",
                duration_ms=elapsed_ms(start),
            )
            return text
        finally:
            unbind_request_id(token)

    wrapped.__name__ = func.__name__
    wrapped.__doc__ = func.__doc__
    wrapped.__module__ = func.__module__
    wrapped.__signature__ = new_sig  # type: ignore[attr-defined]
    return wrapped


def register_discovered_tools(
    app,
    client_provider: Callable[[], DatahubClient] | DatahubClient,
    modules: List[ModuleType] | None = None,
) -> List[str]:
    """
    Register discovered tools on an app that exposes a .tool decorator.
    Tools are named datahub_<function name> and described by their docstring.
    Returns the registered tool names.
    """
    if isinstance(client_provider, DatahubClient):
        _client = client_provider

        def client_provider():
            return _client

    if not hasattr(app, "tool"):
        raise TypeError("app must expose a 'tool' decorator")

    modules = modules or discover_tool_modules()
    seen_names: Set[str] = set()
    registered: List[str] = []

    for module in modules:
        for func in iter_tool_functions(module):
            name = tool_name(func)
            if name in seen_names:
                raise ValueError(f"Duplicate tool name detected: {name}")

            wrapped = _wrap_tool(func, client_provider)
            description = inspect.cleandoc(func.__doc__ or "") or None
            # Results are JSON text; no structured output schema is advertised.
            app.tool(name=name, description=description, structured_output=False)(
                wrapped
            )
            seen_names.add(name)
            registered.append(name)
            log.info("Registered tool: %s (%s)", name, module.__name__)

    return registered
