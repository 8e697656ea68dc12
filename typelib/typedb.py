"""In-memory database of builtin and struct type layouts."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum, IntFlag
from typing import Optional


class BuiltinType(IntEnum):
    """Reserved type identifiers for builtin types."""

    INT8 = 0
    INT16 = 1
    INT32 = 2
    INT64 = 3
    HALF = 4
    FLOAT = 5
    DOUBLE = 6
    FP128 = 7
    X86_FP80 = 8
    PPC_FP128 = 9
    PTR = 10
    NUM_VALID_IDS = 11
    UNKNOWN_TYPE = 255
    NUM_RESERVED_IDS = 256


class StructFlags(IntFlag):
    """Flags attached to a struct type."""

    USER_DEF = 1
    VEC = 2


@dataclass
class StructTypeInfo:
    """Layout description of one struct type."""

    id: int
    name: str
    extent: int
    num_members: int
    offsets: list[int] = field(default_factory=list)
    member_types: list[int] = field(default_factory=list)
    array_sizes: list[int] = field(default_factory=list)
    flags: int = 0


class TypeRegistrationError(ValueError):
    """Raised when a struct cannot be registered under its id."""


BUILTIN_NAMES: tuple[str, ...] = (
    "int8",
    "int16",
    "int32",
    "int64",
    "half",
    "float",
    "double",
    "float128",
    "x86_float80",
    "ppc_float128",
    "pointer",
)

BUILTIN_SIZES: tuple[int, ...] = (1, 2, 4, 8, 2, 4, 8, 16, 16, 16, struct.calcsize("P"))

UNKNOWN_STRUCT_NAME = "UnknownStruct"


class TypeDB:
    """Registry of struct types keyed by their numeric id."""

    def __init__(self) -> None:
        self._structs: dict[int, StructTypeInfo] = {}

    def clear(self) -> None:
        """Remove every registered struct."""
        self._structs.clear()

    def is_builtin_type(self, type_id: int) -> bool:
        return 0 <= type_id < BuiltinType.NUM_VALID_IDS

    def is_reserved_type(self, type_id: int) -> bool:
        return 0 <= type_id < BuiltinType.NUM_RESERVED_IDS

    def is_struct_type(self, type_id: int) -> bool:
        return type_id >= BuiltinType.NUM_RESERVED_IDS

    def is_user_defined_type(self, type_id: int) -> bool:
        info = self._structs.get(type_id)
        return info is not None and bool(info.flags & StructFlags.USER_DEF)

    def is_vector_type(self, type_id: int) -> bool:
        info = self._structs.get(type_id)
        return info is not None and bool(info.flags & StructFlags.VEC)

    def is_valid(self, type_id: int) -> bool:
        return self.is_builtin_type(type_id) or type_id in self._structs

    def register_struct(self, struct_info: StructTypeInfo) -> None:
        """Register a struct; raise TypeRegistrationError if its id is taken."""
        type_id = struct_info.id
        if self.is_valid(type_id):
            if self.is_reserved_type(type_id):
                reason = "Type ID is reserved for builtin types"
            else:
                reason = f"Conflicting struct is {self._structs[type_id].name}"
            raise TypeRegistrationError(
                f"Invalid type ID {type_id} for struct {struct_info.name}: {reason}"
            )
        self._structs[type_id] = struct_info

    def get_type_name(self, type_id: int) -> str:
        if self.is_builtin_type(type_id):
            return BUILTIN_NAMES[type_id]
        if self.is_struct_type(type_id):
            info = self._structs.get(type_id)
            if info is not None:
                return info.name
        return UNKNOWN_STRUCT_NAME

    def get_struct_info(self, type_id: int) -> Optional[StructTypeInfo]:
        return self._structs.get(type_id)

    def get_type_size(self, type_id: int) -> int:
        if self.is_reserved_type(type_id):
            return BUILTIN_SIZES[type_id] if self.is_builtin_type(type_id) else 0
        info = self._structs.get(type_id)
        return info.extent if info is not None else 0

    def struct_list(self) -> list[StructTypeInfo]:
        """Registered structs in registration order."""
        return list(self._structs.values())