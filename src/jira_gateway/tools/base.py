"""Tool definition types and schema helpers.

A tool is a static entry mapping caller arguments onto Jira REST calls. Three
shapes exist:

    SingleCallTool  one request, payload returned as-is unless ``shape`` is set
    LookupTool      a read whose payload decides the follow-up write
    BatchTool       one request per item, run concurrently
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

from jira_gateway.remote.models import RemoteRequest

Arguments = dict[str, Any]

_ITEM_TYPE_NAMES = {dict: "an object", str: "a string"}


class ToolArgumentError(ValueError):
    """Caller-supplied arguments cannot be turned into a request."""


def _passthrough(args: Arguments, payload: Any) -> Any:
    return payload


@dataclass(frozen=True)
class ToolDefinition:
    name: str
    description: str
    input_schema: dict[str, Any]

    @property
    def required(self) -> tuple[str, ...]:
        return tuple(self.input_schema.get("required", ()))

    @property
    def defaults(self) -> Arguments:
        return {
            name: prop["default"]
            for name, prop in self.input_schema.get("properties", {}).items()
            if "default" in prop
        }

    def missing_arguments(self, arguments: Arguments) -> list[str]:
        """Required argument names that are absent or null."""
        return [name for name in self.required if arguments.get(name) is None]

    def with_defaults(self, arguments: Arguments) -> Arguments:
        merged = self.defaults
        merged.update({key: value for key, value in arguments.items() if value is not None})
        return merged


@dataclass(frozen=True)
class SingleCallTool(ToolDefinition):
    build: Callable[[Arguments], RemoteRequest] | None = None
    shape: Callable[[Arguments, Any], Any] = _passthrough


@dataclass(frozen=True)
class LookupTool(ToolDefinition):
    """Reads first, then acts on what the read returned.

    ``act`` receives the lookup payload and returns the write request, or
    raises ToolArgumentError when the arguments do not match what Jira has.
    """

    lookup: Callable[[Arguments], RemoteRequest] | None = None
    act: Callable[[Arguments, Any], RemoteRequest] | None = None
    shape: Callable[[Arguments, Any, Any], Any] | None = None


@dataclass(frozen=True)
class BatchTool(ToolDefinition):
    items_argument: str = ""
    item_type: type = dict
    item_required: tuple[str, ...] = ()
    build_item: Callable[[Any], RemoteRequest] | None = None
    shape_success: Callable[[Any, Any], Any] | None = None
    shape_failure: Callable[[Any, Any], Any] | None = None

    def invalid_items(self, items: list[Any]) -> list[str]:
        """Describe items of the wrong type or lacking required fields."""
        problems = []
        for index, item in enumerate(items):
            if not isinstance(item, self.item_type):
                expected = _ITEM_TYPE_NAMES.get(self.item_type, self.item_type.__name__)
                problems.append(f"item {index} is not {expected}")
                continue
            if not isinstance(item, dict):
                continue
            missing = [name for name in self.item_required if item.get(name) is None]
            if missing:
                problems.append(f"item {index} is missing {', '.join(missing)}")
        return problems


# ---------------------------------------------------------------------------
# Schema helpers
# ---------------------------------------------------------------------------

def string(description: str, **extra: Any) -> dict[str, Any]:
    return {"type": "string", "description": description, **extra}


def number(description: str, **extra: Any) -> dict[str, Any]:
    return {"type": "number", "description": description, **extra}


def boolean(description: str, **extra: Any) -> dict[str, Any]:
    return {"type": "boolean", "description": description, **extra}


def string_list(description: str) -> dict[str, Any]:
    return {"type": "array", "items": {"type": "string"}, "description": description}


def object_schema(properties: dict[str, Any], required: list[str] | None = None) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema


def segment(value: Any) -> str:
    """Quote an identifier for use as a single path segment."""
    return quote(str(value), safe="")


def compact(**values: Any) -> dict[str, Any]:
    """Drop keys whose value is None or empty string."""
    return {key: value for key, value in values.items() if value is not None and value != ""}


def done(message: str) -> dict[str, Any]:
    return {"success": True, "message": message}
