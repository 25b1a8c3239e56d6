"""Documentation records shared by the analyzers, the codec and collaborators."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class PropDoc:
    """A caller-configurable input declared as an exported script binding."""

    name: str
    type: str = "any"
    default_value: Optional[str] = None
    required: bool = False
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "default_value": self.default_value,
            "required": self.required,
            "description": self.description,
        }


@dataclass(frozen=True)
class EventDoc:
    """A named signal emitted by dispatch calls or markup handlers."""

    name: str
    detail: str = "void"
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "detail": self.detail, "description": self.description}


@dataclass(frozen=True)
class SlotDoc:
    """An insertion point in the component markup."""

    name: str = "default"
    props: Tuple[str, ...] = ()
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "props": list(self.props), "description": self.description}


@dataclass(frozen=True)
class ComponentDoc:
    """Structured documentation for one component.

    ``last_updated`` is only populated when a document is decoded from its
    Markdown form and does not take part in equality checks.
    """

    name: str
    description: str = ""
    props: Tuple[PropDoc, ...] = ()
    events: Tuple[EventDoc, ...] = ()
    slots: Tuple[SlotDoc, ...] = ()
    last_updated: Optional[datetime] = field(default=None, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "props": [prop.to_dict() for prop in self.props],
            "events": [event.to_dict() for event in self.events],
            "slots": [slot.to_dict() for slot in self.slots],
            "last_updated": self.last_updated.isoformat() if self.last_updated else None,
        }


__all__ = ["ComponentDoc", "EventDoc", "PropDoc", "SlotDoc"]
