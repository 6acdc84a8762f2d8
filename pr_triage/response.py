"""Decoding of GraphQL response envelopes."""
import json
from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, Tuple, Type, TypeVar, Union
from pr_triage.errors import MalformedPayload
from pr_triage.models import expect_mapping, json_type
T = TypeVar("T")


@dataclass(frozen=True)
class GraphQLErrorEntry:
    message: str
    path: Optional[Tuple[Union[str, int], ...]] = None
    extensions: Optional[Dict[str, Any]] = None
    locations: Optional[Tuple[Dict[str, Any], ...]] = None

    @property
    def path_text(self) -> str:
        if not self.path:
            return ""
        parts = []
        for segment in self.path:
            if isinstance(segment, int):
                parts.append(f"[{segment}]")
            else:
                parts.append(f".{segment}" if parts else str(segment))
        return "".join(parts)

    @property
    def error_type(self) -> Optional[str]:
        """GitHub's ``type`` (e.g. NOT_FOUND), from the entry or its extensions."""
        if self.extensions and isinstance(self.extensions.get("type"), str):
            return self.extensions["type"]
        return None

    @classmethod
    def from_dict(cls, raw, path: str) -> "GraphQLErrorEntry":
        raw = expect_mapping(raw, path)
        message = raw.get("message")
        if not isinstance(message, str):
            raise MalformedPayload(f"expected a string message, got {json_type(message)}", f"{path}.message")
        error_path = raw.get("path")
        if error_path is not None:
            if not isinstance(error_path, list) or not all(
                isinstance(p, (str, int)) and not isinstance(p, bool) for p in error_path
            ):
                raise MalformedPayload("expected an array of strings and integers", f"{path}.path")
            error_path = tuple(error_path)
        extensions = raw.get("extensions")
        if extensions is not None:
            extensions = dict(expect_mapping(extensions, f"{path}.extensions"))
        # GitHub puts ``type`` at the top level instead of under extensions
        if isinstance(raw.get("type"), str):
            extensions = dict(extensions or {})
            extensions.setdefault("type", raw["type"])
        locations = raw.get("locations")
        if locations is not None:
            if not isinstance(locations, list):
                raise MalformedPayload(f"expected an array, got {json_type(locations)}", f"{path}.locations")
            locations = tuple(
                expect_mapping(loc, f"{path}.locations[{i}]") for i, loc in enumerate(locations)
            )
        return cls(message=message, path=error_path, extensions=extensions, locations=locations)


@dataclass(frozen=True)
class GraphQLEnvelope(Generic[T]):
    data: Optional[T] = None
    errors: Optional[Tuple[GraphQLErrorEntry, ...]] = None
    extensions: Optional[Dict[str, Any]] = None

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)


def decode_envelope(raw: Union[bytes, str], data_type: Type[T]) -> GraphQLEnvelope[T]:
    """Decode a response body into an envelope whose ``data`` is a ``data_type`` tree.

    ``data_type`` must provide ``from_dict(raw, path)``. Raises MalformedPayload
    when the body is not JSON, not an object, or carries neither ``data`` nor
    ``errors``.
    """
    try:
        text = raw.decode("utf-8") if isinstance(raw, (bytes, bytearray)) else raw
        payload = json.loads(text)
    except (UnicodeDecodeError, ValueError, RecursionError) as e:
        raise MalformedPayload(f"response body is not valid JSON ({e})") from e
    if not isinstance(payload, dict):
        raise MalformedPayload(f"expected a JSON object, got {json_type(payload)}")
    raw_data = payload.get("data")
    raw_errors = payload.get("errors")
    if raw_data is None and raw_errors is None:
        raise MalformedPayload("neither data nor errors present")
    errors = None
    if raw_errors is not None:
        if not isinstance(raw_errors, list):
            raise MalformedPayload(f"expected an array, got {json_type(raw_errors)}", "errors")
        errors = tuple(
            GraphQLErrorEntry.from_dict(entry, f"errors[{index}]") for index, entry in enumerate(raw_errors)
        )
    data = None if raw_data is None else data_type.from_dict(raw_data, "data")
    extensions = payload.get("extensions")
    if extensions is not None and not isinstance(extensions, dict):
        raise MalformedPayload(f"expected an object, got {json_type(extensions)}", "extensions")
    return GraphQLEnvelope(data=data, errors=errors, extensions=extensions)
