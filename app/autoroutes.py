# =============================================================================
# app/autoroutes.py - File-System Route Autoloading
# =============================================================================
# Registers one APIRouter per route-definition file found under a directory.
# The URL prefix comes from the file's location:
#
#   routes/index.py                    -> /
#   routes/health.py                   -> /health
#   routes/blink/index.py              -> /blink
#   routes/api/sendcredits/index.py    -> /api/sendcredits
#   routes/users/[user_id].py          -> /users/{user_id}
#
# Files whose name starts with "_" (e.g. __init__.py) are skipped.
# Every other .py file must define `router = APIRouter()`; anything else
# raises RouteLoadError, which aborts startup.
# =============================================================================

from __future__ import annotations

import importlib.util
import re
import sys
from pathlib import Path
from types import ModuleType

from fastapi import APIRouter, FastAPI

from app.exceptions import RouteLoadError

# Modules are loaded under this private namespace so route directories
# don't have to be importable packages.
_MODULE_NAMESPACE = "_autoroutes"

_PARAM_SEGMENT = re.compile(r"^\[(\w+)\]$")


def discover_route_files(routes_dir: Path) -> list[Path]:
    """
    List route-definition files under a directory in registration order.

    Raises:
        RouteLoadError: If the directory does not exist
    """
    if not routes_dir.is_dir():
        raise RouteLoadError(str(routes_dir), "routes directory not found")

    files = [
        path for path in routes_dir.rglob("*.py")
        if not any(part.startswith("_") for part in path.relative_to(routes_dir).parts)
    ]
    return sorted(files, key=lambda path: path.relative_to(routes_dir).as_posix())


def route_prefix(routes_dir: Path, file_path: Path) -> str:
    """
    Derive the URL prefix for a route file.

    Example:
        route_prefix(Path("routes"), Path("routes/api/sendcredits/index.py"))
        # "/api/sendcredits"
    """
    parts = list(file_path.relative_to(routes_dir).with_suffix("").parts)
    if parts and parts[-1] == "index":
        parts.pop()

    segments = []
    for part in parts:
        match = _PARAM_SEGMENT.match(part)
        segments.append(f"{{{match.group(1)}}}" if match else part)

    return "/" + "/".join(segments) if segments else ""


def _module_name(routes_dir: Path, file_path: Path) -> str:
    relative = file_path.relative_to(routes_dir).with_suffix("").parts
    cleaned = [re.sub(r"\W", "_", part) for part in relative]
    return ".".join([_MODULE_NAMESPACE, *cleaned])


def load_route_module(routes_dir: Path, file_path: Path) -> ModuleType:
    """
    Import a route file by path.

    Raises:
        RouteLoadError: If the file fails to import or has no `router`
    """
    spec = importlib.util.spec_from_file_location(_module_name(routes_dir, file_path), file_path)
    if spec is None or spec.loader is None:
        raise RouteLoadError(str(file_path), "not an importable Python file")

    module = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        sys.modules.pop(spec.name, None)
        raise RouteLoadError(str(file_path), f"{type(e).__name__}: {e}") from e

    if not isinstance(getattr(module, "router", None), APIRouter):
        raise RouteLoadError(str(file_path), "missing `router = APIRouter()`")

    return module


def autoroutes(app: FastAPI, routes_dir: Path) -> list[str]:
    """
    Register every route file under routes_dir on the application.

    Args:
        app: Application to register routers on
        routes_dir: Directory to scan

    Returns:
        The prefixes registered, in order

    Raises:
        RouteLoadError: On the first file that cannot be registered
    """
    routes_dir = routes_dir.resolve()
    prefixes = []

    for file_path in discover_route_files(routes_dir):
        module = load_route_module(routes_dir, file_path)
        prefix = route_prefix(routes_dir, file_path)
        try:
            app.include_router(module.router, prefix=prefix)
        except Exception as e:
            raise RouteLoadError(str(file_path), f"{type(e).__name__}: {e}") from e
        prefixes.append(prefix)

    return prefixes
