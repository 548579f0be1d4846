"""Hypermedia models for cnd responses (Siren actions, HAL/Siren links)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"

    @property
    def has_body(self) -> bool:
        return self in (HttpMethod.POST, HttpMethod.PUT, HttpMethod.PATCH)


class FieldKind(str, Enum):
    """What kind of value an action field expects."""

    ADDRESS = "address"
    DATA = "data"
    VALUE = "value"
    GAS_LIMIT = "gas_limit"
    GENERIC = "generic"


KNOWN_LEDGERS = ("bitcoin", "ethereum", "lightning")

_NAMED_KINDS = {
    "address": FieldKind.ADDRESS,
    "data": FieldKind.DATA,
    "value": FieldKind.VALUE,
    "gas_limit": FieldKind.GAS_LIMIT,
}


@dataclass(frozen=True)
class FieldHint:
    kind: FieldKind = FieldKind.GENERIC
    ledger: Optional[str] = None

    @classmethod
    def derive(cls, name: str, classes: List[str]) -> "FieldHint":
        tags = [c.lower() for c in classes]
        ledger = next((tag for tag in tags if tag in KNOWN_LEDGERS), None)

        for tag in tags:
            if tag in _NAMED_KINDS:
                return cls(_NAMED_KINDS[tag], ledger)

        lowered = name.lower()
        if lowered in _NAMED_KINDS:
            return cls(_NAMED_KINDS[lowered], ledger)
        if lowered.endswith("_identity") or lowered.endswith("_address"):
            return cls(FieldKind.ADDRESS, ledger)
        return cls(FieldKind.GENERIC, ledger)


class SirenField(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str = Field(min_length=1)
    classes: List[str] = Field(default_factory=list, alias="class")
    type: Optional[str] = Field(default=None, description="Input type, e.g. text")
    value: Optional[Any] = Field(default=None, description="Pre-filled value supplied by cnd")
    title: Optional[str] = None

    @property
    def hint(self) -> FieldHint:
        return FieldHint.derive(self.name, self.classes)

    @property
    def is_prefilled(self) -> bool:
        return self.value is not None


class SirenAction(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str
    href: str
    method: str = "GET"
    type: Optional[str] = Field(default=None, description="Content type of the request body")
    title: Optional[str] = None
    classes: List[str] = Field(default_factory=list, alias="class")
    fields: List[SirenField] = Field(default_factory=list)

    @field_validator("fields")
    @classmethod
    def _unique_field_names(cls, fields: List[SirenField]) -> List[SirenField]:
        seen = set()
        for field in fields:
            if field.name in seen:
                raise ValueError(f"duplicate field name {field.name!r}")
            seen.add(field.name)
        return fields

    @property
    def ledger(self) -> Optional[str]:
        tags = [c.lower() for c in self.classes]
        for tag in tags:
            if tag in KNOWN_LEDGERS:
                return tag
        for field in self.fields:
            if field.hint.ledger:
                return field.hint.ledger
        return None


def _links_from_body(body: Dict[str, Any]) -> Dict[str, str]:
    links: Dict[str, str] = {}

    # HAL: {"_links": {"self": {"href": ...}, "accept": {"href": ...}}}
    hal = body.get("_links") or {}
    if isinstance(hal, dict):
        for rel, link in hal.items():
            if isinstance(link, dict) and isinstance(link.get("href"), str):
                links[rel] = link["href"]
            elif isinstance(link, str):
                links[rel] = link

    # Siren: {"links": [{"rel": ["self"], "href": ...}]}
    siren = body.get("links") or []
    if isinstance(siren, list):
        for link in siren:
            if not isinstance(link, dict) or not isinstance(link.get("href"), str):
                continue
            rels = link.get("rel") or []
            if isinstance(rels, str):
                rels = [rels]
            for rel in rels:
                links.setdefault(rel, link["href"])

    return links


class SwapResource(BaseModel):
    """A swap as currently reported by cnd. Fetched fresh, never cached."""

    state: Optional[str] = None
    actions: List[SirenAction] = Field(default_factory=list)
    links: Dict[str, str] = Field(default_factory=dict)
    properties: Dict[str, Any] = Field(default_factory=dict)
    body: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_body(cls, body: Dict[str, Any]) -> "SwapResource":
        properties = body.get("properties") or {}
        if not isinstance(properties, dict):
            properties = {}

        state = body.get("state")
        if not isinstance(state, str):
            state = properties.get("state")
        if not isinstance(state, str):
            state = None

        actions = [SirenAction.model_validate(a) for a in body.get("actions") or []]

        return cls(
            state=state,
            actions=actions,
            links=_links_from_body(body),
            properties=properties,
            body=body,
        )

    @property
    def self_href(self) -> Optional[str]:
        return self.links.get("self")

    def action(self, name: str) -> Optional[SirenAction]:
        for action in self.actions:
            if action.name == name:
                return action
        return None

    def link(self, rel: str) -> Optional[str]:
        return self.links.get(rel)

    def available_actions(self) -> List[str]:
        names = [a.name for a in self.actions]
        names.extend(rel for rel in self.links if rel != "self" and rel not in names)
        return names
