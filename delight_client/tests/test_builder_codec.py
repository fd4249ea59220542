import pytest

from delight_client.domain import codec
from delight_client.domain.exceptions import DecodingError
from delight_client.messages.builder import MessageBuilder, make_id_factory


def test_builder_fills_generated_id_and_timestamp():
    b = MessageBuilder(id_factory=lambda: "m-1", clock=lambda: 42)
    msg = b.build("hi", user_id="u", username="bob")
    assert msg.message_id == "m-1"
    assert msg.timestamp_ms == 42
    assert msg.sender.language_code == "en"
    assert codec.message_to_payload(msg) == {
        "message": {
            "message_id": "m-1",
            "from": {"id": "u", "username": "bob", "language_code": "en"},
            "date": 42,
            "text": "hi",
        }
    }


def test_generated_ids_are_unique():
    b = MessageBuilder()
    ids = {b.build("x", "u", "n").message_id for _ in range(500)}
    assert len(ids) == 500
    assert all(i.startswith("Wi-Py-") for i in ids)


def test_id_prefix_is_configurable():
    assert make_id_factory("Wi-Test-")().startswith("Wi-Test-")


def test_default_clock_is_epoch_millis():
    msg = MessageBuilder().build("x", "u", "n")
    # 2020-01-01 之后、且是毫秒而不是秒
    assert msg.timestamp_ms > 1_577_836_800_000


def test_encode_keeps_non_ascii_text():
    msg = MessageBuilder(id_factory=lambda: "m", clock=lambda: 1).build("你好", "u", "n")
    assert "你好".encode("utf-8") in codec.encode_message(msg)


def test_decode_error_payload_variants():
    assert codec.decode_error_payload({"error": {"message": "m", "type": "t"}}).message == "m"
    assert codec.decode_error_payload({"text": "x"}) is None
    assert codec.decode_error_payload({"error": "oops"}) is None
    assert codec.decode_error_payload({"error": {"message": "m"}}) is None
    assert codec.decode_error_payload({"error": {"message": "m", "type": "t", "code": 5}}) is None
    assert codec.decode_error_payload([1, 2]) is None


def test_decode_poll_result_optional_fields():
    res = codec.decode_poll_result({"uuid": "a", "completed": True})
    assert res.text is None and res.new_tokens is None
    assert res.raw == {"uuid": "a", "completed": True}


@pytest.mark.parametrize(
    "data",
    [
        {"uuid": "a"},
        {"uuid": 1, "completed": True},
        {"uuid": "a", "completed": 1},
        {"uuid": "a", "completed": True, "text": 3},
        ["not", "an", "object"],
    ],
)
def test_decode_poll_result_rejects_bad_shapes(data):
    with pytest.raises(DecodingError):
        codec.decode_poll_result(data)


def test_parse_json_rejects_garbage():
    with pytest.raises(DecodingError):
        codec.parse_json(b"\xff\xfe not json")


def test_parse_json_rejects_deeply_nested_body():
    with pytest.raises(DecodingError):
        codec.parse_json(b"[" * 200000 + b"]" * 200000)
