from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import io
from typing import Any

from construct import ConstructError, StreamError, Struct

from ..version import Version
from .errors import BufferUnderflowError, ReplayFormatError


def _field_names(struct: Struct) -> tuple[str, ...]:
    return tuple(str(sub.name) for sub in struct.subcons if sub.name and not str(sub.name).startswith("_"))


def _plain(value: Any) -> Any:
    # construct containers carry private `_io`-style keys; records only want the named fields.
    if isinstance(value, dict):
        return {str(key): _plain(item) for key, item in value.items() if not str(key).startswith("_")}
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value


@dataclass(frozen=True, slots=True)
class Gate:
    """Fields appended to a record by the replay version `since`."""

    since: Version
    fields: Struct

    def field_names(self) -> tuple[str, ...]:
        return _field_names(self.fields)


@dataclass(frozen=True, slots=True)
class GatedLayout:
    """A fixed base layout followed by an ordered chain of version gates.

    A record carries the base fields plus every gate in the longest prefix of
    `gates` whose version is satisfied. Evaluation stops at the first gate the
    replay is too old for; later gates are never read even if their own version
    would pass.
    """

    name: str
    base: Struct
    gates: tuple[Gate, ...] = ()

    def __post_init__(self) -> None:
        for prev, cur in zip(self.gates, self.gates[1:]):
            if cur.since < prev.since:
                raise ValueError(f"{self.name}: gate {cur.since} listed after {prev.since}")

    def satisfied(self, version: Version) -> tuple[Gate, ...]:
        out: list[Gate] = []
        for gate in self.gates:
            if version < gate.since:
                break
            out.append(gate)
        return tuple(out)

    def size_for(self, version: Version) -> int:
        """Bytes consumed from a payload for `version`."""
        return int(self.base.sizeof()) + sum(int(gate.fields.sizeof()) for gate in self.satisfied(version))

    def field_names(self) -> tuple[str, ...]:
        names = list(_field_names(self.base))
        for gate in self.gates:
            names.extend(gate.field_names())
        return tuple(names)

    def parse(self, window: bytes | memoryview, version: Version) -> dict[str, Any]:
        """Decode `window` into a flat field dict; fields past the satisfied prefix are `None`.

        Bytes after the satisfied prefix are ignored: newer replays append fields
        this layout does not know about yet.
        """
        # construct reads from a stream, so each window is copied once here.
        stream = io.BytesIO(window)
        gates = self.satisfied(version)
        try:
            values: dict[str, Any] = _plain(self.base.parse_stream(stream))
            for gate in gates:
                values.update(_plain(gate.fields.parse_stream(stream)))
        except StreamError as exc:
            raise BufferUnderflowError(
                f"{self.name} payload truncated: need {self.size_for(version)} bytes for {version}, got {len(window)}"
            ) from exc
        except ConstructError as exc:
            raise ReplayFormatError(f"{self.name}: {exc}") from exc

        for gate in self.gates[len(gates) :]:
            for name in gate.field_names():
                values[name] = None
        return values

    def build(self, values: Mapping[str, Any], version: Version) -> bytes:
        out = bytearray()
        try:
            out += self.base.build(dict(values))
            for gate in self.satisfied(version):
                out += gate.fields.build(dict(values))
        except ConstructError as exc:
            raise ReplayFormatError(f"{self.name}: {exc}") from exc
        return bytes(out)
