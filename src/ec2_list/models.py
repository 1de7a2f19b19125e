from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_TAG = "Name"


@dataclass(slots=True, frozen=True)
class TagFilter:
    name: str
    pattern: str = ""


@dataclass(slots=True, frozen=True)
class DisplayOptions:
    color: bool = True
    headers: bool = True
    ip_only: bool = False


@dataclass(slots=True, frozen=True)
class FilterSpec:
    tags: tuple[TagFilter, ...] = (TagFilter(DEFAULT_TAG),)
    state: str = ""
    display: DisplayOptions = field(default_factory=DisplayOptions)
    help_requested: bool = False

    @property
    def tag_names(self) -> tuple[str, ...]:
        return tuple(tag.name for tag in self.tags)

    @property
    def extra_tag_names(self) -> tuple[str, ...]:
        return tuple(name for name in self.tag_names if name != DEFAULT_TAG)


@dataclass(slots=True, frozen=True)
class InstanceRecord:
    instance_id: str
    private_ip: str | None
    name: str | None
    instance_type: str
    state: str
    tags: dict[str, str | None] = field(default_factory=dict)

    @property
    def sort_key(self) -> str:
        return self.name or ""


@dataclass(slots=True, frozen=True)
class Column:
    label: str
    width: int
