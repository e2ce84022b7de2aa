from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

UNKNOWN_TYPE = "Unknown"


@dataclass(slots=True)
class ParameterRecord:
    internal_name: str
    external_name: Optional[str] = None
    type: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        if self.external_name is not None:
            payload["externalName"] = self.external_name
        payload["internalName"] = self.internal_name
        if self.type is not None:
            payload["type"] = self.type
        return payload


@dataclass(slots=True)
class PropertyRecord:
    name: str
    type: str = UNKNOWN_TYPE

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "type": self.type}


@dataclass(slots=True)
class MethodRecord:
    name: str
    parameters: List[ParameterRecord] = field(default_factory=list)
    return_type: Optional[str] = None
    calls: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "name": self.name,
            "parameters": [param.to_dict() for param in self.parameters],
        }
        if self.return_type is not None:
            payload["returnType"] = self.return_type
        payload["calls"] = list(self.calls)
        return payload


@dataclass(slots=True)
class EntityRecord:
    """A top-level type declaration: class, struct, enum, protocol or extension.

    ``inherited_types`` and ``conformed_protocols`` come from a positional
    split of the inheritance clause (first entry vs. the rest); extensions
    list every entry as a protocol. The grammar does not tell a superclass
    from a protocol, so both fields are approximate.
    """

    name: str
    kind: str
    inherited_types: List[str] = field(default_factory=list)
    conformed_protocols: List[str] = field(default_factory=list)
    properties: List[PropertyRecord] = field(default_factory=list)
    methods: List[MethodRecord] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind,
            "inheritedTypes": list(self.inherited_types),
            "conformedProtocols": list(self.conformed_protocols),
            "properties": [prop.to_dict() for prop in self.properties],
            "methods": [method.to_dict() for method in self.methods],
        }


@dataclass(slots=True)
class FileFailure:
    path: str
    reason: str
