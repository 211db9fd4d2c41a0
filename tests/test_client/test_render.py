"""Tests for outcome rendering."""

from __future__ import annotations

import json

import pytest

from dgraph_admin.client.response import (
    decode_body,
    embedded_errors,
    format_uptime,
    health_rows,
    render_outcome,
    schema_text,
)
from dgraph_admin.models import (
    ApplicationError,
    DropData,
    GetHealth,
    GetSchema,
    Success,
    TransportError,
)
from dgraph_admin.output import OutputFormat, OutputManager, set_output

HEALTH_BODY = json.dumps(
    [
        {"address": "alpha1:7080", "status": "healthy", "uptime": 3723, "instance": "alpha"},
        {"address": "zero1:5080", "status": "healthy", "uptime": 90061, "instance": "zero"},
    ]
).encode()


class TestDecodeBody:
    def test_json(self) -> None:
        assert decode_body(b'{"a": 1}') == {"a": 1}

    def test_text(self) -> None:
        assert decode_body(b"name: string .") == "name: string ."

    def test_empty(self) -> None:
        assert decode_body(b"") is None


class TestEmbeddedErrors:
    def test_graphql_errors(self) -> None:
        data = {"errors": [{"message": "Unauthorized"}, "plain"], "data": None}
        assert embedded_errors(data) == ["Unauthorized", "plain"]

    @pytest.mark.parametrize("data", [None, [], "text", {"data": {}}, {"errors": "nope"}])
    def test_none(self, data) -> None:
        assert embedded_errors(data) == []


class TestFormatUptime:
    @pytest.mark.parametrize(
        "seconds, expected",
        [
            (0, "0s"),
            (59, "59s"),
            (3723, "1h 2m 3s"),
            (86400, "1day"),
            (2 * 86400 + 60, "2days 1m"),
            (31_557_600, "1year"),
            (2_630_016 * 2 + 5, "2months 5s"),
            (2 * 31_557_600 + 2_630_016 + 86400 + 1, "2years 1month 1day 1s"),
        ],
    )
    def test_format(self, seconds: int, expected: str) -> None:
        assert format_uptime(seconds) == expected


class TestHealthRows:
    def test_rows(self) -> None:
        assert health_rows(json.loads(HEALTH_BODY)) == [
            ["alpha1:7080", "healthy", "1h 2m 3s"],
            ["zero1:5080", "healthy", "1day 1h 1m 1s"],
        ]

    @pytest.mark.parametrize("data", [None, [], {"status": "healthy"}, [{"status": "x"}]])
    def test_not_a_report(self, data) -> None:
        assert health_rows(data) is None


class TestSchemaText:
    @pytest.mark.parametrize(
        "data, expected",
        [
            (
                {"data": {"getGQLSchema": {"schema": "  type A { x: Int }\n"}}},
                (True, "type A { x: Int }"),
            ),
            ({"data": {"getGQLSchema": None}}, (True, "")),
            ({"data": {"schema": None}}, (True, "")),
            ({"schema": "name: string ."}, (True, "name: string .")),
            ("name: string .\n", (True, "name: string .")),
            (None, (True, "")),
            ({"schema": []}, (False, "")),
            ({"data": None, "errors": [{"message": "x"}]}, (False, "")),
        ],
    )
    def test_extract(self, data, expected) -> None:
        assert schema_text(data) == expected


class TestRenderOutcome:
    def test_success_to_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        set_output(OutputManager(format=OutputFormat.JSON, no_color=True))
        render_outcome(GetSchema(), Success(body=b'{"schema": "name: string ."}'))
        captured = capsys.readouterr()
        assert json.loads(captured.out) == {"schema": "name: string ."}
        assert "get-schema: success" in captured.err

    def test_schema_printed_trimmed(self, capsys: pytest.CaptureFixture[str]) -> None:
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True))
        body = b'{"data": {"getGQLSchema": {"schema": "\\ntype Person {\\n  name: String\\n}\\n\\n"}}}'
        render_outcome(GetSchema(), Success(body=body))
        captured = capsys.readouterr()
        assert captured.out == "type Person {\n  name: String\n}\n"
        assert "get-schema: success" in captured.err

    @pytest.mark.parametrize(
        "body",
        [
            b'{"data": {"getGQLSchema": {"schema": ""}}}',
            b'{"data": {"getGQLSchema": null}}',
            b'{"schema": "   "}',
        ],
    )
    def test_empty_schema_prints_no_schema(
        self, capsys: pytest.CaptureFixture[str], body: bytes
    ) -> None:
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True))
        render_outcome(GetSchema(), Success(body=body))
        assert capsys.readouterr().out == "no schema\n"

    def test_schema_json_mode_passes_body_through(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        set_output(OutputManager(format=OutputFormat.JSON, no_color=True, quiet=True))
        render_outcome(GetSchema(), Success(body=b'{"data": {"getGQLSchema": null}}'))
        assert json.loads(capsys.readouterr().out) == {"data": {"getGQLSchema": None}}

    def test_health_summary_plain(self, capsys: pytest.CaptureFixture[str]) -> None:
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True))
        render_outcome(GetHealth(), Success(body=HEALTH_BODY))
        assert capsys.readouterr().out.splitlines() == [
            "alpha1:7080 is healthy, uptime: 1h 2m 3s",
            "zero1:5080 is healthy, uptime: 1day 1h 1m 1s",
        ]

    def test_health_json_mode_passes_body_through(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        set_output(OutputManager(format=OutputFormat.JSON, no_color=True, quiet=True))
        render_outcome(GetHealth(), Success(body=HEALTH_BODY))
        assert json.loads(capsys.readouterr().out) == json.loads(HEALTH_BODY)

    def test_embedded_errors_warned(self, capsys: pytest.CaptureFixture[str]) -> None:
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True))
        body = b'{"errors": [{"message": "resolving updateGQLSchema failed"}]}'
        render_outcome(GetSchema(), Success(body=body))
        err = capsys.readouterr().err
        assert "Warning: server reported: resolving updateGQLSchema failed" in err

    def test_application_error_body_to_stderr_verbatim(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True))
        body = b'{"errors":[{"message":"line 1 column 6: Invalid ending","extensions":{"code":"Error"}}]}'
        render_outcome(GetSchema(), ApplicationError(status_code=400, body=body))
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Error: HTTP 400" in captured.err
        assert body.decode() in captured.err

    def test_transport_error_on_drop_warns_unknown(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        set_output(OutputManager(no_color=True, quiet=True))
        render_outcome(DropData(), TransportError(cause="timed out after 30s: read timeout"))
        err = capsys.readouterr().err
        assert "Error: timed out after 30s" in err
        assert "drop-data outcome is unknown" in err

    def test_transport_error_on_read_has_no_warning(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        set_output(OutputManager(no_color=True))
        render_outcome(GetHealth(), TransportError(cause="connection refused"))
        err = capsys.readouterr().err
        assert "Error: connection refused" in err
        assert "unknown" not in err
