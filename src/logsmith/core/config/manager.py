"""Load and save configuration documents as JSON or XML.

Raw text is auto-detected: trimmed input starting with ``{`` or ``[`` is
JSON, input starting with ``<`` is XML, anything else is a format error.
"""

from __future__ import annotations

import os
import xml.etree.ElementTree as ET
from enum import Enum
from pathlib import Path
from typing import Any, TypeVar

import aiofiles
from pydantic import BaseModel, ValidationError

from ..errors import ConfigurationFormatError, InvalidArgumentError
from ..xmltext import escape_carriage_returns
from .schema import LoggerRoot

ModelT = TypeVar("ModelT", bound=BaseModel)

_XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>\n'


class SaveFormat(str, Enum):
    JSON = "json"
    XML = "xml"


def detect_format(data: str) -> SaveFormat:
    if data is None or not data.strip():
        raise InvalidArgumentError("configuration data must not be empty")
    stripped = data.strip()
    if stripped[0] in "{[":
        return SaveFormat.JSON
    if stripped[0] == "<":
        return SaveFormat.XML
    raise ConfigurationFormatError("configuration data is neither JSON nor XML")


# XML mapping of a pydantic JSON-mode dump: mappings and lists are tagged
# with kind=, None with nil="true", scalars are element text.


def _to_element(tag: str, value: Any) -> ET.Element:
    element = ET.Element(tag)
    if value is None:
        element.set("nil", "true")
    elif isinstance(value, dict):
        element.set("kind", "map")
        for key, item in value.items():
            element.append(_to_element(key, item))
    elif isinstance(value, list):
        element.set("kind", "list")
        for item in value:
            element.append(_to_element("item", item))
    elif isinstance(value, bool):
        element.text = "true" if value else "false"
    else:
        element.text = str(value)
    return element


def _from_element(element: ET.Element) -> Any:
    if element.get("nil") == "true":
        return None
    kind = element.get("kind")
    if kind == "list":
        return [_from_element(child) for child in element]
    if kind == "map" or len(element):
        return {child.tag: _from_element(child) for child in element}
    return element.text or ""


def dump_document(root: BaseModel, fmt: SaveFormat = SaveFormat.JSON) -> str:
    """Serialize a configuration model to text."""
    if root is None:
        raise InvalidArgumentError("root must not be None")
    fmt = SaveFormat(fmt)
    if fmt is SaveFormat.JSON:
        return root.model_dump_json(indent=2)

    element = _to_element(type(root).__name__, root.model_dump(mode="json"))
    ET.indent(element)
    return _XML_DECLARATION + escape_carriage_returns(ET.tostring(element, encoding="unicode"))


def parse_document(data: str, model: type[ModelT] = LoggerRoot) -> ModelT:
    """Parse JSON or XML text into ``model``."""
    fmt = detect_format(data)
    try:
        if fmt is SaveFormat.JSON:
            return model.model_validate_json(data)

        element = ET.fromstring(data.strip())
        if element.tag != model.__name__:
            raise ConfigurationFormatError(
                f"expected <{model.__name__}> root element, got <{element.tag}>"
            )
        return model.model_validate(_from_element(element))
    except ValidationError as exc:
        raise ConfigurationFormatError(f"invalid {model.__name__} document: {exc}") from exc
    except ET.ParseError as exc:
        raise ConfigurationFormatError(f"malformed XML: {exc}") from exc


def parse_document_bytes(
    data: bytes, model: type[ModelT] = LoggerRoot, encoding: str = "utf-8"
) -> ModelT:
    if not data:
        raise InvalidArgumentError("configuration bytes must not be empty")
    return parse_document(data.decode(encoding).lstrip("\ufeff"), model)


def _check_path(path: str | os.PathLike[str]) -> Path:
    if path is None or not os.fspath(path):
        raise InvalidArgumentError("path must not be empty")
    return Path(path)


def load_document(path: str | os.PathLike[str], model: type[ModelT] = LoggerRoot) -> ModelT:
    p = _check_path(path)
    if not p.is_file():
        raise FileNotFoundError(f"Configuration file not found: {p}")
    return parse_document(p.read_text(encoding="utf-8-sig"), model)


async def load_document_async(
    path: str | os.PathLike[str], model: type[ModelT] = LoggerRoot
) -> ModelT:
    p = _check_path(path)
    if not p.is_file():
        raise FileNotFoundError(f"Configuration file not found: {p}")
    async with aiofiles.open(p, encoding="utf-8-sig") as f:
        data = await f.read()
    return parse_document(data, model)


def save_document(
    path: str | os.PathLike[str], root: BaseModel, fmt: SaveFormat = SaveFormat.JSON
) -> None:
    p = _check_path(path)
    p.write_text(dump_document(root, fmt), encoding="utf-8")


async def save_document_async(
    path: str | os.PathLike[str], root: BaseModel, fmt: SaveFormat = SaveFormat.JSON
) -> None:
    p = _check_path(path)
    text = dump_document(root, fmt)
    async with aiofiles.open(p, "w", encoding="utf-8") as f:
        await f.write(text)
