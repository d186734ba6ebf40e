"""Testes para RequestOptions (merge e builders imutáveis)."""

from __future__ import annotations

import io
from unittest.mock import MagicMock

import pytest

from api.connectors.feishu.request_options import MultipartPart, RequestOptions


class TestBuilders:
    def test_builders_return_copies(self) -> None:
        base = RequestOptions()
        changed = base.with_headers({"A": "1"}).with_query_param("k", "v")

        assert base.headers == {}
        assert base.query == {}
        assert changed.headers == {"A": "1"}
        assert changed.query == {"k": "v"}

    def test_later_value_wins_for_same_key(self) -> None:
        opts = (
            RequestOptions()
            .with_headers({"Authorization": "Bearer a"})
            .with_headers({"Authorization": "Bearer b"})
            .with_query({"page_size": "10"})
            .with_query_param("page_size", "20")
        )
        assert opts.headers == {"Authorization": "Bearer b"}
        assert opts.query == {"page_size": "20"}

    def test_multipart_parts_accumulate_in_order(self) -> None:
        opts = (
            RequestOptions()
            .with_form_field("image_type", "message")
            .with_form_file("image", "/tmp/dir/logo.png")
            .with_form_stream("extra", "notes.txt", io.BytesIO(b"x"))
        )
        assert [p.field_name for p in opts.parts] == ["image_type", "image", "extra"]
        assert [p.filename for p in opts.parts] == [None, "logo.png", "notes.txt"]
        assert opts.parts[0].stream == b"message"
        assert opts.parts[1].path == "/tmp/dir/logo.png"

    def test_merged_appends_parts_and_overrides_labels(self) -> None:
        first = RequestOptions(api_domain="im", api_name="a").with_form_field("f1", "1")
        second = RequestOptions(api_name="b").with_form_field("f2", "2").with_debug(True)

        merged = first.merged(second)

        assert merged.api_domain == "im"
        assert merged.api_name == "b"
        assert [p.field_name for p in merged.parts] == ["f1", "f2"]
        assert merged.debug is True

    def test_merged_honors_explicit_false_debug(self) -> None:
        merged = RequestOptions(debug=True).merged(RequestOptions().with_debug(False))

        assert merged.debug is False

    def test_merged_honors_explicit_empty_values(self) -> None:
        client = object()
        first = RequestOptions(api_domain="im", api_name="a", http_client=client)  # type: ignore[arg-type]
        second = RequestOptions().with_labels("", "").with_transport(None)

        merged = first.merged(second)

        assert (merged.api_domain, merged.api_name) == ("", "")
        assert merged.http_client is None

    def test_merged_keeps_values_not_informed(self) -> None:
        debug_logger = MagicMock()
        first = RequestOptions(debug=True, debug_logger=debug_logger)

        merged = first.merged(RequestOptions().with_query_param("page_size", "20"))

        assert merged.debug is True
        assert merged.debug_logger is debug_logger
        assert merged.query == {"page_size": "20"}


class TestMultipartPart:
    def test_requires_exactly_one_source(self) -> None:
        with pytest.raises(ValueError, match="exatamente uma fonte"):
            MultipartPart(field_name="image")
        with pytest.raises(ValueError, match="exatamente uma fonte"):
            MultipartPart(field_name="image", path="/a.png", stream=b"x")


class TestDebugLog:
    def test_emits_only_with_flag_and_logger(self) -> None:
        debug_logger = MagicMock()

        RequestOptions(debug=True).debug_log("sem logger")
        RequestOptions(debug_logger=debug_logger).debug_log("sem flag")
        RequestOptions(debug=True, debug_logger=debug_logger).debug_log("ok")

        debug_logger.debug.assert_called_once_with("[FEISHU-DEBUG] ok")
