"""Data containers for the Alfen Eve client."""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from .const import DEFAULT_TIMEOUT, DEFAULT_USERNAME

Number = Union[int, float]


@dataclass(frozen=True)
class DeviceSettings:
    """Connection settings for one charger.

    Built once from the config entry and handed to every component, so a
    poll cycle never sees settings change underneath it.
    """

    address: str
    password: str
    username: str = DEFAULT_USERNAME
    verify_ssl: bool = False
    timeout: float = DEFAULT_TIMEOUT

    @property
    def base_url(self) -> str:
        return f"https://{self.address}"


@dataclass(frozen=True)
class PropertyRecord:
    """One property as returned by ``/api/prop``."""

    id: str
    access: int = 0
    type: int = 0
    len: int = 0
    cat: str = ""
    value: Optional[Union[Number, str]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PropertyRecord":
        return cls(
            id=str(data.get("id", "")),
            access=data.get("access", 0),
            type=data.get("type", 0),
            len=data.get("len", 0),
            cat=data.get("cat", ""),
            value=data.get("value"),
        )


@dataclass(frozen=True)
class CapabilityUpdate:
    """A value destined for one capability."""

    capability_id: str
    value: Optional[Union[Number, str]]


@dataclass(frozen=True)
class JsonBody:
    """Response body that decoded as JSON."""

    data: Any


@dataclass(frozen=True)
class TextBody:
    """Response body that was kept as plain text."""

    text: str


ApiResponse = Union[JsonBody, TextBody]
