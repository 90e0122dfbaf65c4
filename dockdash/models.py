"""Domain models for the Docker Engine responses.

The Engine speaks PascalCase (``ApiVersion``) while the models use
snake_case (``api_version``).  The translation is driven by an explicit
mapping table per model; incoming keys are matched case-insensitively
against both the wire name and the field name, so either spelling is
accepted.  Keys absent from the table are dropped.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, TypeAdapter, model_validator

# field name -> Engine wire name
VERSION_FIELDS: dict[str, str] = {
    "version": "Version",
    "api_version": "ApiVersion",
    "os": "Os",
    "arch": "Arch",
    "kernel_version": "KernelVersion",
}

CONTAINER_FIELDS: dict[str, str] = {
    "id": "Id",
    "names": "Names",
    "state": "State",
    "status": "Status",
}


def _fold(key: str) -> str:
    return key.replace("_", "").lower()


def remap_keys(data: Any, table: dict[str, str]) -> Any:
    """Rename the keys of *data* to field names according to *table*.

    Non-dict input is returned untouched so that pydantic reports the
    type error itself.
    """
    if not isinstance(data, dict):
        return data
    lookup: dict[str, str] = {}
    for field, wire in table.items():
        lookup[_fold(wire)] = field
        lookup[_fold(field)] = field
    remapped: dict[str, Any] = {}
    for key, value in data.items():
        field = lookup.get(_fold(str(key)))
        if field is not None:
            remapped[field] = value
    return remapped


class Version(BaseModel):
    """Engine version information from ``GET /version``."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    version: str
    api_version: str
    os: str
    arch: str
    kernel_version: str

    @model_validator(mode="before")
    @classmethod
    def _from_wire(cls, data: Any) -> Any:
        return remap_keys(data, VERSION_FIELDS)


class Container(BaseModel):
    """One entry of ``GET /containers/json``."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    names: list[str]
    state: str
    status: str

    @model_validator(mode="before")
    @classmethod
    def _from_wire(cls, data: Any) -> Any:
        return remap_keys(data, CONTAINER_FIELDS)


# Engine order is preserved; the list is never re-sorted.
ContainerList = list[Container]

container_list_adapter: TypeAdapter[ContainerList] = TypeAdapter(ContainerList)
