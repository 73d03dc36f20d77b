import msgpack
import pytest

from rrcp.proto import (
    Action,
    Image,
    RrcpConfig,
    SensorData,
    ServoStatus,
    WasmModule,
)


def _sample_sensor_data():
    return SensorData(
        servos=[ServoStatus(angle=1.0), ServoStatus(angle=2.0), ServoStatus(angle=3.0)],
        images=[Image(width=3, height=4, data=bytes([1] * 12))],
    )


def test_empty_sensor_data_wire_bytes():
    assert SensorData().to_msgpack() == b"\x82\xa6servos\x90\xa6images\x90"


def test_sensor_data_round_trip():
    sensor = _sample_sensor_data()
    assert SensorData.from_msgpack(sensor.to_msgpack()) == sensor


def test_sensor_data_encoding_is_map_with_bin_image():
    decoded = msgpack.unpackb(_sample_sensor_data().to_msgpack(), raw=False)
    assert list(decoded) == ["servos", "images"]
    assert decoded["servos"][1] == {"angle": 2.0}
    assert decoded["images"][0]["data"] == bytes([1] * 12)


def test_sensor_data_from_array_form():
    payload = msgpack.packb([[[1.5]], [[3, 4, b"\x01\x02"]]], use_bin_type=True)
    sensor = SensorData.from_msgpack(payload)
    assert sensor.servos == [ServoStatus(angle=1.5)]
    assert sensor.images == [Image(width=3, height=4, data=b"\x01\x02")]


def test_image_data_accepts_int_array():
    payload = msgpack.packb(
        {"servos": [], "images": [{"width": 1, "height": 2, "data": [5, 6]}]}
    )
    assert SensorData.from_msgpack(payload).images[0].data == b"\x05\x06"


def test_image_width_out_of_range():
    sensor = SensorData(images=[Image(width=1 << 32, height=1, data=b"")])
    with pytest.raises(ValueError, match="width"):
        sensor.to_msgpack()


def test_action_round_trip():
    action = Action(ts=1_700_000_000_123, actions=[0.5, -1.25, 3.0])
    assert Action.from_msgpack(action.to_msgpack()) == action


def test_action_integer_actions_become_floats():
    action = Action.from_msgpack(msgpack.packb({"ts": 7, "actions": [1, 2]}))
    assert action.actions == [1.0, 2.0]
    assert all(isinstance(v, float) for v in action.actions)


def test_action_ignores_unknown_fields():
    payload = msgpack.packb({"extra": "x", "ts": 9, "actions": []})
    assert Action.from_msgpack(payload) == Action(ts=9, actions=[])


def test_action_missing_field():
    with pytest.raises(ValueError, match="actions"):
        Action.from_msgpack(msgpack.packb({"ts": 1}))


def test_action_negative_ts_rejected():
    with pytest.raises(ValueError, match="ts"):
        Action.from_msgpack(msgpack.packb({"ts": -1, "actions": []}))


def test_garbage_rejected():
    with pytest.raises(ValueError):
        Action.from_msgpack(b"\xc1")


def test_wrong_top_level_type():
    with pytest.raises(ValueError, match="map or an array"):
        RrcpConfig.from_msgpack(msgpack.packb(5))


def test_config_round_trip_and_main_wasm():
    config = RrcpConfig(
        modules=[
            WasmModule(name="helper", wasm=b"\x00asm-helper"),
            WasmModule(name="main", wasm=b"\x00asm-main"),
            WasmModule(name="main", wasm=b"\x00asm-second"),
        ]
    )
    decoded = RrcpConfig.from_msgpack(config.to_msgpack())
    assert decoded == config
    assert decoded.get_main_wasm() == b"\x00asm-main"


def test_config_without_main():
    config = RrcpConfig(modules=[WasmModule(name="other", wasm=b"x")])
    assert config.get_main_wasm() is None
    assert RrcpConfig().get_main_wasm() is None


def test_config_module_name_must_be_string():
    payload = msgpack.packb({"modules": [{"name": 3, "wasm": b""}]}, use_bin_type=True)
    with pytest.raises(ValueError, match="name"):
        RrcpConfig.from_msgpack(payload)