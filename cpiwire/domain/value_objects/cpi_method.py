"""
CPI Method Table

Architectural Intent:
- Enumerates the fixed CPI method surface and each method's positional parameters
- Catches caller mistakes (arity, JSON type) before a wire request is built

Design Decisions:
- Parameters accept JSON-shaped Python types only; values are never coerced
- bool is rejected where an integer is expected, since json encodes it as true/false
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

from cpiwire.domain.errors import InvalidArguments

_JSON_TYPE_NAMES = {
    str: "string",
    int: "integer",
    float: "number",
    bool: "boolean",
    dict: "object",
    list: "array",
}


@dataclass(frozen=True)
class Parameter:
    name: str
    accepts: tuple[type, ...]
    nullable: bool = False

    def accepts_value(self, value: Any) -> bool:
        if value is None:
            return self.nullable
        if isinstance(value, bool) and bool not in self.accepts:
            return False
        if isinstance(value, tuple) and list in self.accepts:
            return True
        return isinstance(value, self.accepts)

    def kinds(self) -> str:
        kinds = "|".join(_JSON_TYPE_NAMES.get(t, t.__name__) for t in self.accepts)
        if self.nullable:
            kinds += "|null"
        return kinds

    def describe(self) -> str:
        return f"{self.name}: {self.kinds()}"


@dataclass(frozen=True)
class CpiMethod:
    name: str
    parameters: tuple[Parameter, ...] = ()

    @property
    def arity(self) -> int:
        return len(self.parameters)

    def bind(self, arguments: tuple[Any, ...]) -> tuple[Any, ...]:
        if len(arguments) != self.arity:
            raise InvalidArguments(
                f"{self.name} takes {self.arity} argument(s) "
                f"({self.signature()}), got {len(arguments)}"
            )
        for parameter, value in zip(self.parameters, arguments):
            if not parameter.accepts_value(value):
                raise InvalidArguments(
                    f"{self.name}: argument {parameter.name!r} expects "
                    f"{parameter.kinds()}, "
                    f"got {type(value).__name__}"
                )
        return tuple(list(v) if isinstance(v, tuple) else v for v in arguments)

    def signature(self) -> str:
        return ", ".join(p.describe() for p in self.parameters)


def _string(name: str, nullable: bool = False) -> Parameter:
    return Parameter(name, (str,), nullable)


def _object(name: str, nullable: bool = False) -> Parameter:
    return Parameter(name, (dict,), nullable)


_METHODS = (
    CpiMethod("current_vm_id"),
    CpiMethod(
        "create_stemcell",
        (_string("image_path"), _object("cloud_properties")),
    ),
    CpiMethod("delete_stemcell", (_string("stemcell_cid"),)),
    CpiMethod(
        "create_vm",
        (
            _string("agent_id"),
            _string("stemcell_cid"),
            _object("cloud_properties"),
            _object("network_settings"),
            Parameter("disk_cids", (list,), nullable=True),
            _object("environment", nullable=True),
        ),
    ),
    CpiMethod("delete_vm", (_string("vm_cid"),)),
    CpiMethod("has_vm", (_string("vm_cid"),)),
    CpiMethod("reboot_vm", (_string("vm_cid"),)),
    CpiMethod("set_vm_metadata", (_string("vm_cid"), _object("metadata"))),
    CpiMethod("configure_networks", (_string("vm_cid"), _object("networks"))),
    CpiMethod(
        "create_disk",
        (Parameter("size", (int,)), _string("vm_cid", nullable=True)),
    ),
    CpiMethod("delete_disk", (_string("disk_cid"),)),
    CpiMethod("attach_disk", (_string("vm_cid"), _string("disk_cid"))),
    CpiMethod("detach_disk", (_string("vm_cid"), _string("disk_cid"))),
    CpiMethod("snapshot_disk", (_string("disk_cid"),)),
    CpiMethod("delete_snapshot", (_string("snapshot_cid"),)),
    CpiMethod("get_disks", (_string("vm_cid"),)),
    CpiMethod("ping"),
)

METHOD_TABLE: Mapping[str, CpiMethod] = MappingProxyType(
    {method.name: method for method in _METHODS}
)


def lookup_method(name: str) -> CpiMethod:
    try:
        return METHOD_TABLE[name]
    except (KeyError, TypeError):
        raise InvalidArguments(f"Unknown CPI method: {name!r}") from None
