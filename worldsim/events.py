"""Event types and the envelope that carries them."""

import typing
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from enum import Enum
from typing import Any, ClassVar

from worldsim.core_types import ResourceType
from worldsim.ids import AgentId, FactionId, ItemId
from worldsim.spatial import Position

_ID_TYPES = (AgentId, ItemId, FactionId)


def _encode(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, _ID_TYPES):
        return str(value.value)
    if isinstance(value, Position):
        return {"x": value.x, "y": value.y, "z": value.z}
    if isinstance(value, (list, tuple)):
        return [_encode(item) for item in value]
    return value


def _number(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"expected a number, got {value!r}")
    return float(value)


def _decode(tp: Any, value: Any) -> Any:
    if typing.get_origin(tp) is list:
        (item_type,) = typing.get_args(tp)
        if not isinstance(value, list):
            raise ValueError(f"expected a list, got {value!r}")
        return [_decode(item_type, item) for item in value]
    if tp in _ID_TYPES:
        return tp(uuid.UUID(str(value)))
    if tp is Position:
        if not isinstance(value, Mapping):
            raise ValueError(f"expected a position, got {value!r}")
        return Position(_number(value["x"]), _number(value["y"]), _number(value["z"]))
    if isinstance(tp, type) and issubclass(tp, Enum):
        return tp(value)
    if tp is float:
        return _number(value)
    if tp is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"expected an integer, got {value!r}")
        return value
    if tp is str:
        if not isinstance(value, str):
            raise ValueError(f"expected a string, got {value!r}")
        return value
    return value


class Event:
    """Base of all typed events; subclasses are dataclasses."""

    event_type: ClassVar[str]

    def to_payload(self) -> dict[str, Any]:
        """JSON-compatible dictionary of the event's fields."""
        return {f.name: _encode(getattr(self, f.name)) for f in fields(self)}

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Event":
        """Rebuild an event from its payload; raises ValueError if malformed."""
        if not isinstance(payload, Mapping):
            raise ValueError(f"invalid {cls.__name__} payload: not a mapping")
        try:
            values = {f.name: _decode(f.type, payload[f.name]) for f in fields(cls)}
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"invalid {cls.__name__} payload: {exc}") from exc
        return cls(**values)


def _parse_timestamp(text: str) -> datetime:
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


@dataclass(frozen=True)
class EventEnvelope:
    """An event with its identity, time and origin."""

    event_type: str
    source: str
    payload: Any
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible dictionary of the envelope."""
        return {
            "id": str(self.id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type,
            "source": self.source,
            "payload": self.payload,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EventEnvelope":
        """Rebuild an envelope; raises ValueError if malformed."""
        try:
            return cls(
                event_type=str(data["event_type"]),
                source=str(data["source"]),
                payload=data["payload"],
                id=uuid.UUID(str(data["id"])),
                timestamp=_parse_timestamp(str(data["timestamp"])),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"invalid event envelope: {exc}") from exc


class Season(Enum):
    """Seasons of the year."""

    SPRING = "Spring"
    SUMMER = "Summer"
    AUTUMN = "Autumn"
    WINTER = "Winter"


@dataclass(frozen=True)
class PriceChangeEvent(Event):
    event_type: ClassVar[str] = "PriceChange"
    resource: ResourceType
    old_price: float
    new_price: float
    total_supply: int
    total_demand: int


@dataclass(frozen=True)
class TradeExecutedEvent(Event):
    event_type: ClassVar[str] = "TradeExecuted"
    seller_id: AgentId
    buyer_id: AgentId
    resource: ResourceType
    quantity: int
    price: float
    location: Position


@dataclass(frozen=True)
class WarDeclaredEvent(Event):
    event_type: ClassVar[str] = "WarDeclared"
    aggressor: FactionId
    defender: FactionId
    reason: str


@dataclass(frozen=True)
class PeaceTreatyEvent(Event):
    event_type: ClassVar[str] = "PeaceTreaty"
    faction_a: FactionId
    faction_b: FactionId
    terms: str


@dataclass(frozen=True)
class BlightStartedEvent(Event):
    event_type: ClassVar[str] = "BlightStarted"
    center: Position
    radius: float
    affected_resource: ResourceType


@dataclass(frozen=True)
class DroughtStartedEvent(Event):
    event_type: ClassVar[str] = "DroughtStarted"
    region: str
    severity: float
    expected_duration_days: int


@dataclass(frozen=True)
class SeasonChangeEvent(Event):
    event_type: ClassVar[str] = "SeasonChange"
    old_season: Season
    new_season: Season


@dataclass(frozen=True)
class AgentDiedEvent(Event):
    event_type: ClassVar[str] = "AgentDied"
    agent_id: AgentId
    cause: str
    location: Position


@dataclass(frozen=True)
class AgentBornEvent(Event):
    event_type: ClassVar[str] = "AgentBorn"
    agent_id: AgentId
    parent_ids: list[AgentId]
    location: Position


@dataclass(frozen=True)
class DungeonMasterEvent(Event):
    event_type: ClassVar[str] = "DungeonMaster"
    event_name: str
    description: str
    impact: str