"""
Symbol model shared by the extractors, the merger and the code emitter
"""

from dataclasses import dataclass, field
from enum import Enum


class Origin(Enum):
    """Where a logical entity was declared"""
    ANDROID = "android"
    IOS = "ios"
    UNIFIED = "unified"


@dataclass(frozen=True)
class Parameter:
    """Method parameter; its position in the owning parameter list matters"""
    name: str
    source_type: str


@dataclass(frozen=True)
class Call:
    """Single-shot request/response member"""
    name: str
    return_type: str
    params: tuple[Parameter, ...] = ()


@dataclass(frozen=True)
class Subscription:
    """Continuous member exposed as a stream; the sink parameter is already removed"""
    name: str
    return_type: str
    params: tuple[Parameter, ...] = ()


Callable = Call | Subscription


@dataclass
class LogicalEntity:
    """A native class whose members are bridged; becomes one Dart proxy class"""
    name: str
    callables: list[Callable] = field(default_factory=list)
    origin: Origin = Origin.UNIFIED

    def callable_names(self) -> list[str]:
        return [member.name for member in self.callables]


def describe_callable(member: Callable) -> str:
    """One-line signature, used in progress output and conflict reports"""
    params = ", ".join(f"{p.name}: {p.source_type}" for p in member.params)
    if isinstance(member, Call):
        return f"{member.name}({params}): {member.return_type}"
    if isinstance(member, Subscription):
        return f"{member.name}({params}): stream of {member.return_type}"
    raise TypeError(f"Unsupported callable: {member!r}")
