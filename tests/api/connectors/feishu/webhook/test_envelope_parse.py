"""Testes para parse do corpo e classificação do envelope."""

from __future__ import annotations

import pytest

from api.connectors.feishu.webhook.envelope import (
    Unrecognized,
    V1Envelope,
    V2Envelope,
    VerificationPing,
    classify_envelope,
)
from api.connectors.feishu.webhook.receive import (
    InvalidJsonError,
    open_envelope,
    parse_event_body,
)
from app.infra.crypto import CryptoError, encrypt_event_payload


class TestParseEventBody:
    def test_keeps_raw_text_of_each_member(self) -> None:
        body = b'{ "schema" : "2.0",\n "event":{"a" : [1, 2],"b":"\\u00e9"} , "n": null }'

        parsed = parse_event_body(body)

        assert parsed.fields["schema"] == "2.0"
        assert parsed.raw_bytes("event") == b'{"a" : [1, 2],"b":"\\u00e9"}'
        assert parsed.raw_bytes("schema") == b'"2.0"'
        assert parsed.raw_bytes("n") == b"null"

    def test_missing_member_is_empty(self) -> None:
        assert parse_event_body(b"{}").raw_bytes("event") == b""

    def test_duplicate_keys_last_wins(self) -> None:
        parsed = parse_event_body(b'{"event": {"v": 1}, "event": {"v": 2}}')

        assert parsed.fields["event"] == {"v": 2}
        assert parsed.raw_bytes("event") == b'{"v": 2}'

    def test_non_ascii_event_preserved(self) -> None:
        body = '{"event":{"text":"你好 olá"}}'.encode()

        assert parse_event_body(body).raw_bytes("event") == '{"text":"你好 olá"}'.encode()

    @pytest.mark.parametrize(
        ("body", "reason"),
        [
            (b"\xff\xfe", "invalid_encoding"),
            (b"{not json", "invalid_json"),
            (b"[" * 100_000 + b"]" * 100_000, "invalid_json"),
            (b"[1, 2]", "payload_not_object"),
            (b'"texto"', "payload_not_object"),
        ],
    )
    def test_invalid_bodies(self, body: bytes, reason: str) -> None:
        with pytest.raises(InvalidJsonError, match=reason):
            parse_event_body(body)


class TestOpenEnvelope:
    def test_plain_envelope_untouched(self) -> None:
        parsed = parse_event_body(b'{"schema": "2.0"}')
        assert open_envelope(parsed, "key") is parsed

    def test_empty_encrypt_is_not_decrypted(self) -> None:
        parsed = parse_event_body(b'{"encrypt": ""}')
        assert open_envelope(parsed, "key") is parsed

    def test_decrypts_once(self) -> None:
        inner = b'{"encrypt": "not base64!!", "schema": "2.0"}'
        outer = parse_event_body(
            ('{"encrypt": "%s"}' % encrypt_event_payload(inner, "key")).encode()
        )

        opened = open_envelope(outer, "key")

        assert opened.fields["encrypt"] == "not base64!!"
        assert opened.fields["schema"] == "2.0"

    def test_bad_ciphertext_raises(self) -> None:
        with pytest.raises(CryptoError):
            open_envelope(parse_event_body(b'{"encrypt": "AAAA"}'), "key")


class TestClassifyEnvelope:
    def test_url_verification(self) -> None:
        parsed = parse_event_body(b'{"type":"url_verification","token":"T","challenge":"c-1"}')
        assert classify_envelope(parsed) == VerificationPing(token="T", challenge="c-1")

    def test_url_verification_wins_over_schema(self) -> None:
        parsed = parse_event_body(b'{"type":"url_verification","schema":"2.0","header":{}}')
        assert isinstance(classify_envelope(parsed), VerificationPing)

    def test_v2_envelope(self) -> None:
        parsed = parse_event_body(
            b'{"schema":"2.0","header":{"event_id":"e1","event_type":"im.message.receive_v1",'
            b'"token":"T","create_time":"1700000000000","app_id":"cli","tenant_key":"tk","extra":1},'
            b'"event":{"x":1}}'
        )

        inbound = classify_envelope(parsed)

        assert isinstance(inbound, V2Envelope)
        assert inbound.header.event_id == "e1"
        assert inbound.header.event_type == "im.message.receive_v1"
        assert inbound.header.token == "T"
        assert inbound.event == b'{"x":1}'

    def test_v2_without_header_is_unrecognized(self) -> None:
        parsed = parse_event_body(b'{"schema":"2.0","event":{}}')
        assert classify_envelope(parsed) == Unrecognized(reason="schema_2_without_header")

    def test_v2_null_header_values_become_empty(self) -> None:
        parsed = parse_event_body(
            b'{"schema":"2.0","header":{"event_type":"im.message.receive_v1","token":null,"event_id":null}}'
        )

        inbound = classify_envelope(parsed)

        assert isinstance(inbound, V2Envelope)
        assert inbound.header.token == ""
        assert inbound.header.event_id == ""

    def test_v2_header_with_wrong_types_raises(self) -> None:
        parsed = parse_event_body(b'{"schema":"2.0","header":{"event_type":["x"]}}')
        with pytest.raises(InvalidJsonError, match="invalid_event_header"):
            classify_envelope(parsed)

    def test_v1_envelope(self) -> None:
        parsed = parse_event_body(
            b'{"uuid":"u-1","token":"T","ts":"1700000000.1","type":"event_callback","event":{"type":"message"}}'
        )

        inbound = classify_envelope(parsed)

        assert isinstance(inbound, V1Envelope)
        assert inbound.header.uuid == "u-1"
        assert inbound.header.type == "event_callback"
        assert inbound.event == b'{"type":"message"}'

    @pytest.mark.parametrize("body", [b"{}", b'{"uuid":""}', b'{"schema":"1.0"}'])
    def test_unknown_shapes(self, body: bytes) -> None:
        assert classify_envelope(parse_event_body(body)) == Unrecognized(reason="unknown_envelope_shape")
