"""MessagePack messages exchanged with the server."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

import msgpack


def _unpack(data: bytes) -> Any:
    try:
        return msgpack.unpackb(data, raw=False, strict_map_key=False)
    except (ValueError, msgpack.UnpackException) as exc:
        raise ValueError(f"invalid MessagePack data: {exc}") from exc


def _pack(obj: Any) -> bytes:
    return msgpack.packb(obj, use_bin_type=True)


def _fields(obj: Any, type_name: str, names: Sequence[str]) -> tuple:
    """Read struct fields from either the map or the array encoding."""
    if isinstance(obj, dict):
        for name in names:
            if name not in obj:
                raise ValueError(f"{type_name}: missing field {name!r}")
        return tuple(obj[name] for name in names)
    if isinstance(obj, (list, tuple)):
        if len(obj) != len(names):
            raise ValueError(
                f"{type_name}: expected {len(names)} fields, got {len(obj)}"
            )
        return tuple(obj)
    raise ValueError(f"{type_name}: expected a map or an array, got {type(obj).__name__}")


def _uint(value: Any, bits: int, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{what}: expected an integer, got {type(value).__name__}")
    if not 0 <= value < (1 << bits):
        raise ValueError(f"{what}: {value} out of range for u{bits}")
    return value


def _float(value: Any, what: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{what}: expected a number, got {type(value).__name__}")
    return float(value)


def _bytes(value: Any, what: str) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, list):
        return bytes(_uint(item, 8, what) for item in value)
    raise ValueError(f"{what}: expected bytes, got {type(value).__name__}")


def _str(value: Any, what: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{what}: expected a string, got {type(value).__name__}")
    return value


def _list(value: Any, what: str) -> list:
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"{what}: expected an array, got {type(value).__name__}")
    return list(value)


@dataclass
class ServoStatus:
    """Reported state of one servo."""

    angle: float

    def _to_obj(self) -> dict:
        return {"angle": float(self.angle)}

    @classmethod
    def _from_obj(cls, obj: Any) -> ServoStatus:
        (angle,) = _fields(obj, "ServoStatus", ("angle",))
        return cls(angle=_float(angle, "ServoStatus.angle"))


@dataclass
class Image:
    """Raw camera frame."""

    width: int
    height: int
    data: bytes

    def _to_obj(self) -> dict:
        return {
            "width": _uint(self.width, 32, "Image.width"),
            "height": _uint(self.height, 32, "Image.height"),
            "data": bytes(self.data),
        }

    @classmethod
    def _from_obj(cls, obj: Any) -> Image:
        width, height, data = _fields(obj, "Image", ("width", "height", "data"))
        return cls(
            width=_uint(width, 32, "Image.width"),
            height=_uint(height, 32, "Image.height"),
            data=_bytes(data, "Image.data"),
        )


@dataclass
class SensorData:
    """Sensor readings sent along with an action request."""

    servos: list[ServoStatus] = field(default_factory=list)
    images: list[Image] = field(default_factory=list)

    def to_msgpack(self) -> bytes:
        """Encode as a MessagePack map."""
        return _pack(
            {
                "servos": [servo._to_obj() for servo in self.servos],
                "images": [image._to_obj() for image in self.images],
            }
        )

    @classmethod
    def from_msgpack(cls, data: bytes) -> SensorData:
        """Decode from MessagePack, map or array form."""
        servos, images = _fields(_unpack(data), "SensorData", ("servos", "images"))
        return cls(
            servos=[ServoStatus._from_obj(s) for s in _list(servos, "SensorData.servos")],
            images=[Image._from_obj(i) for i in _list(images, "SensorData.images")],
        )


@dataclass
class Action:
    """Actuator commands returned by the server."""

    ts: int
    actions: list[float] = field(default_factory=list)

    def to_msgpack(self) -> bytes:
        """Encode as a MessagePack map."""
        return _pack(
            {
                "ts": _uint(self.ts, 64, "Action.ts"),
                "actions": [float(value) for value in self.actions],
            }
        )

    @classmethod
    def from_msgpack(cls, data: bytes) -> Action:
        """Decode from MessagePack, map or array form."""
        ts, actions = _fields(_unpack(data), "Action", ("ts", "actions"))
        return cls(
            ts=_uint(ts, 64, "Action.ts"),
            actions=[_float(v, "Action.actions") for v in _list(actions, "Action.actions")],
        )


@dataclass
class WasmModule:
    """Named WebAssembly module delivered in the configuration."""

    name: str
    wasm: bytes

    def _to_obj(self) -> dict:
        return {"name": self.name, "wasm": bytes(self.wasm)}

    @classmethod
    def _from_obj(cls, obj: Any) -> WasmModule:
        name, wasm = _fields(obj, "WasmModule", ("name", "wasm"))
        return cls(name=_str(name, "WasmModule.name"), wasm=_bytes(wasm, "WasmModule.wasm"))


@dataclass
class RrcpConfig:
    """Robot configuration delivered by the server."""

    modules: list[WasmModule] = field(default_factory=list)

    def to_msgpack(self) -> bytes:
        """Encode as a MessagePack map."""
        return _pack({"modules": [module._to_obj() for module in self.modules]})

    @classmethod
    def from_msgpack(cls, data: bytes) -> RrcpConfig:
        """Decode from MessagePack, map or array form."""
        (modules,) = _fields(_unpack(data), "RrcpConfig", ("modules",))
        return cls(
            modules=[WasmModule._from_obj(m) for m in _list(modules, "RrcpConfig.modules")]
        )

    def get_main_wasm(self) -> bytes | None:
        """Bytes of the first module named ``main``, or None."""
        return next((m.wasm for m in self.modules if m.name == "main"), None)