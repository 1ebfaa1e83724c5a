import os
import sys
from datetime import datetime
from typing import Any, TextIO

from loguru import logger

DEFAULT_LOG_FORMAT: str = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}"

STANDARD_SINKS: tuple[str, ...] = ("sys.stdout", "sys.stderr")


def dget(data: dict, *path: str, default: Any = None) -> Any:
    """Returns the value of the first path that resolves to a non-None value."""
    if not path or not data:
        return default

    for p in path:
        value = dotget(data, p)
        if value is not None:
            return value

    return default


def dotexists(data: dict, *paths: str) -> bool:
    for path in paths:
        if dotget(data, path, default="@@") != "@@":
            return True
    return False


def dotexpand(paths: str | list[str]) -> list[str]:
    """Expands paths with ',' and ':'."""
    if not paths:
        return []
    if not isinstance(paths, (str, list)):
        raise ValueError("dot path must be a string or list of strings")
    paths = paths if isinstance(paths, list) else [paths]
    expanded_paths: list[str] = []
    for p in paths:
        for q in p.replace(" ", "").split(","):
            if not q:
                continue
            if ":" in q:
                expanded_paths.extend([q.replace(":", "."), q.replace(":", "_")])
            else:
                expanded_paths.append(q)
    return expanded_paths


def dotget(data: dict, path: str, default: Any = None) -> Any:
    """Gets element from dict. Path can be x.y.y or x_y_y or x:y:y.
    if path is x:y:y then element is searched using both x.y.y and x_y_y."""

    for key in dotexpand(path):
        d: Any = data
        for attr in key.split("."):
            d = d.get(attr) if isinstance(d, dict) else None
            if d is None:
                break
        if d is not None:
            return d
    return default


def dotset(data: dict, path: str, value: Any) -> dict:
    """Sets element in dict using dot notation x.y.z or x:y:z"""

    d: dict = data
    attrs: list[str] = path.replace(":", ".").split(".")
    for attr in attrs[:-1]:
        if not attr:
            continue
        d = d.setdefault(attr, {})
    d[attrs[-1]] = value

    return data


def env2dict(prefix: str, data: dict[str, Any] | None = None, lower_key: bool = True) -> dict[str, Any]:
    """Loads environment variables starting with `prefix` into data.

    The remainder of the variable name is split on double underscores, i.e.
    BASELINE_MCP_OPTIONS__API_BASE_URL is stored at options:api_base_url.
    """
    if data is None:
        data = {}
    if not prefix:
        return data
    if lower_key:
        prefix = prefix.lower()
    for key, value in os.environ.items():
        if lower_key:
            key = key.lower()
        if key.startswith(f"{prefix}_"):
            dotset(data, key[len(prefix) + 1 :].replace("__", ":"), value)
    return data


def replace_env_vars(data: dict[str, Any] | list[Any] | str) -> dict[str, Any] | list[Any] | str:
    """Searches data recursively for string values matching ${ENV_VAR} and replaces them with os.getenv("ENV_VAR", "")"""
    if isinstance(data, dict):
        return {k: replace_env_vars(v) for k, v in data.items()}
    if isinstance(data, list):
        return [replace_env_vars(i) for i in data]
    if isinstance(data, str) and data.startswith("${") and data.endswith("}"):
        env_var: str = data[2:-1]
        return os.getenv(env_var, "")
    return data


def _standard_stream(name: str, reserve_stdout: bool) -> TextIO:
    if reserve_stdout or name == "sys.stderr":
        return sys.stderr
    return sys.stdout


def configure_logging(opts: dict[str, Any] | None = None, sink: TextIO | None = None, reserve_stdout: bool = False) -> None:
    """Resets loguru and installs a default handler on `sink`.

    The default sink is stdout, or stderr when `reserve_stdout` is set. Optional
    `handlers` in opts are passed on to loguru. A sink named "sys.stdout" or
    "sys.stderr" is replaced by the stream (always stderr when `reserve_stdout`
    is set), a "*.log" sink is placed in opts["folder"] with a date prefix.
    """
    logger.remove()
    logger.add(
        sink or (sys.stderr if reserve_stdout else sys.stdout),
        level=(opts or {}).get("level", "INFO"),
        format=DEFAULT_LOG_FORMAT,
    )
    if not opts or not opts.get("handlers"):
        return

    handlers: list[dict[str, Any]] = []
    for handler in opts["handlers"]:

        if not handler.get("sink"):
            continue

        handler = dict(handler)

        if handler["sink"] in STANDARD_SINKS:
            handler["sink"] = _standard_stream(handler["sink"], reserve_stdout)

        elif isinstance(handler["sink"], str) and handler["sink"].endswith(".log"):
            handler["sink"] = os.path.join(
                opts.get("folder", "logs"),
                f"{datetime.now().strftime('%Y%m%d')}_{handler['sink']}",
            )

        handlers.append(handler)

    if handlers:
        logger.configure(handlers=handlers)
