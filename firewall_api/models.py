"""Wire models for the firewall control-plane.

``ConfigDocument`` mirrors the awall policy file layout. Parsing is strict
about scalar types (no str<->int coercion) and normalizes optional
collections: an optional collection that arrives empty is stored as ``None``
so it never reappears in the canonical form.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AppBaseModel(BaseModel):
    # Only wire names are accepted; unknown keys (Python names included) are dropped.
    model_config = ConfigDict(extra="ignore")


Int16 = Annotated[int, Field(strict=True, ge=-(2**15), le=2**15 - 1)]
Int32 = Annotated[int, Field(strict=True, ge=-(2**31), le=2**31 - 1)]


class Message(AppBaseModel):
    message: str


class Interface(AppBaseModel):
    iface: str


class Policy(AppBaseModel):
    in_f: Optional[str] = Field(default=None, alias="in")
    out: Optional[str] = None
    action: str


class ClampMss(AppBaseModel):
    out: str


class ConnLimit(AppBaseModel):
    count: Int32
    interval: Int32


class Filter(AppBaseModel):
    in_f: str = Field(alias="in")
    out: str
    service: str
    action: str
    conn_limit: ConnLimit = Field(alias="conn-limit")


class Dnat(AppBaseModel):
    in_f: str = Field(alias="in")
    dest: str
    service: str
    to_port: str = Field(alias="to-port")


class Snat(AppBaseModel):
    out: str


class Service(AppBaseModel):
    proto: str
    port: Int16


class ServiceMap(AppBaseModel):
    service: Dict[str, Service]


class ConfigDocument(AppBaseModel):
    description: str
    variable: Optional[Dict[str, str]] = None
    zone: Dict[str, Interface]
    policy: List[Policy]
    clamp_mss: Optional[List[ClampMss]] = Field(default=None, alias="clamp-mss")
    filter: Optional[List[Filter]] = None
    dnat: Optional[List[Dnat]] = None
    snat: Optional[List[Snat]] = None
    service: Optional[ServiceMap] = None

    @field_validator("variable", "clamp_mss", "filter", "dnat", "snat")
    @classmethod
    def _empty_collection_is_absent(cls, value: Any) -> Any:
        return value or None

    @field_validator("service")
    @classmethod
    def _empty_service_map_is_absent(cls, value: Optional[ServiceMap]) -> Optional[ServiceMap]:
        if value is not None and not value.service:
            return None
        return value

    def to_canonical(self) -> str:
        """Compact JSON with wire key names and absent optionals omitted."""
        return self.model_dump_json(by_alias=True, exclude_none=True)


def parse_config(raw: Union[str, bytes, bytearray]) -> ConfigDocument:
    """Parse JSON text into a ConfigDocument; raises ``pydantic.ValidationError``."""
    return ConfigDocument.model_validate_json(raw)


__all__ = [
    "ClampMss",
    "ConfigDocument",
    "ConnLimit",
    "Dnat",
    "Filter",
    "Interface",
    "Message",
    "Policy",
    "Service",
    "ServiceMap",
    "Snat",
    "parse_config",
]
