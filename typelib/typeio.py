"""Reading and writing type databases as YAML files."""

from __future__ import annotations

import json
import logging
import os
from typing import Iterable, Union

import yaml

from typelib.typedb import StructTypeInfo, TypeDB, TypeRegistrationError

_log = logging.getLogger(__name__)

# (yaml key, attribute, kind, non-negative)
_FIELDS = (
    ("id", "id", "int", False),
    ("name", "name", "str", False),
    ("extent", "extent", "int", True),
    ("member_count", "num_members", "int", True),
    ("offsets", "offsets", "list", True),
    ("types", "member_types", "list", False),
    ("sizes", "array_sizes", "list", True),
    ("flags", "flags", "int", False),
)

_KEY_COLUMN = 17


class TypeFileError(Exception):
    """Raised when a type file cannot be read, parsed or written."""


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _convert_item(index: int, item: object) -> StructTypeInfo:
    if not isinstance(item, dict):
        raise TypeFileError(f"entry {index} is not a mapping")
    known = {key for key, *_ in _FIELDS}
    extra = set(map(str, item)) - known
    if extra:
        raise TypeFileError(f"entry {index}: unknown key(s) {', '.join(sorted(extra))}")
    values = {}
    for key, attr, kind, unsigned in _FIELDS:
        if key not in item:
            raise TypeFileError(f"entry {index}: missing required key '{key}'")
        value = item[key]
        if kind == "str":
            if value is None or isinstance(value, (list, dict)):
                raise TypeFileError(f"entry {index}: '{key}' must be a string")
            value = str(value)
        elif kind == "int":
            if not _is_int(value) or (unsigned and value < 0):
                raise TypeFileError(f"entry {index}: '{key}' must be an integer")
        else:
            if value is None:
                value = []
            if not isinstance(value, list) or not all(_is_int(v) for v in value):
                raise TypeFileError(f"entry {index}: '{key}' must be a list of integers")
            if unsigned and any(v < 0 for v in value):
                raise TypeFileError(f"entry {index}: '{key}' must not be negative")
            value = list(value)
        values[attr] = value
    return StructTypeInfo(**values)


def parse_structs(text: str) -> list[StructTypeInfo]:
    """Parse YAML text into struct descriptions."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise TypeFileError(f"malformed type file: {exc}") from exc
    if data is None:
        return []
    if not isinstance(data, list):
        raise TypeFileError("type file must hold a sequence of structs")
    return [_convert_item(i, item) for i, item in enumerate(data)]


def _scalar(name: str) -> str:
    try:
        plain_ok = yaml.safe_load(name) == name and "\n" not in name
    except yaml.YAMLError:
        plain_ok = False
    return name if plain_ok else json.dumps(name)


def _flow(values: Iterable[int]) -> str:
    return "[ " + ", ".join(str(v) for v in values) + " ]"


def _line(key: str, value: object) -> str:
    label = f"{key}:"
    if len(label) >= _KEY_COLUMN:
        label += " "
    return f"{label:<{_KEY_COLUMN}}{value}"


def dump_structs(structs: Iterable[StructTypeInfo]) -> str:
    """Render struct descriptions as a YAML document."""
    lines = ["---"]
    for info in structs:
        rendered = {
            "id": info.id,
            "name": _scalar(info.name),
            "extent": info.extent,
            "member_count": info.num_members,
            "offsets": _flow(info.offsets),
            "types": _flow(info.member_types),
            "sizes": _flow(info.array_sizes),
            "flags": int(info.flags),
        }
        for n, (key, value) in enumerate(rendered.items()):
            prefix = "- " if n == 0 else "  "
            lines.append(prefix + _line(key, value))
    lines.append("...")
    return "\n".join(lines) + "\n"


PathLike = Union[str, "os.PathLike[str]"]


class TypeIO:
    """Loads a TypeDB from, and stores it to, a YAML type file."""

    def __init__(self, type_db: TypeDB) -> None:
        self.type_db = type_db

    def load(self, path: PathLike) -> None:
        """Replace the database contents with the structs in the file.

        Structs whose id conflicts with an earlier one are skipped with a warning.
        """
        try:
            with open(path, encoding="utf-8") as handle:
                text = handle.read()
        except OSError as exc:
            raise TypeFileError(f"cannot read type file {path}: {exc}") from exc

        self.type_db.clear()
        for info in parse_structs(text):
            try:
                self.type_db.register_struct(info)
            except TypeRegistrationError as exc:
                _log.warning("%s", exc)

    def store(self, path: PathLike) -> None:
        """Write every registered struct to the file."""
        text = dump_structs(self.type_db.struct_list())
        try:
            with open(path, "w", encoding="utf-8") as handle:
                handle.write(text)
        except OSError as exc:
            raise TypeFileError(f"Error while storing type file to {path}: {exc}") from exc