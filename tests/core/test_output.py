"""Tests for Output helper."""

import io
import json

from checkzpool.core.output import Output
from checkzpool.core.states import Severity


class TestOutput:
    """Tests for the plugin output helper."""

    def test_emit_stores_data(self):
        """emit() stores data for later retrieval."""
        output = Output()
        output.emit({"devices": [{"path": "sda", "state": "ONLINE"}]})
        assert output.data["devices"][0]["path"] == "sda"

    def test_summary_is_status_line(self):
        output = Output()
        output.set_verdict(Severity.WARNING, "ZPOOL tank : DEGRADED {...} ")
        assert output.summary == "WARNING ZPOOL tank : DEGRADED {...} "
        assert output.exit_code == 1

    def test_no_verdict_is_unknown(self):
        output = Output()
        assert output.summary == ""
        assert output.exit_code == 3

    def test_render_plain_single_line(self):
        stdout, stderr = io.StringIO(), io.StringIO()
        output = Output(stdout=stdout, stderr=stderr)
        output.set_verdict(Severity.OK, "ZPOOL rpool : ONLINE {Size:1G Used:0 Avail:1G Cap:0%} ")

        output.render("plain")

        assert stdout.getvalue() == "OK ZPOOL rpool : ONLINE {Size:1G Used:0 Avail:1G Cap:0%} \n"
        assert stderr.getvalue() == ""

    def test_notices_go_to_stderr(self):
        stdout, stderr = io.StringIO(), io.StringIO()
        output = Output(stdout=stdout, stderr=stderr)
        output.warning("NOTE: beta")
        output.set_verdict(Severity.OK, "fine")

        output.render()

        assert stderr.getvalue() == "NOTE: beta\n"
        assert stdout.getvalue() == "OK fine\n"

    def test_render_json(self):
        stdout = io.StringIO()
        output = Output(stdout=stdout, stderr=io.StringIO())
        output.emit({"pool": {"name": "tank"}})
        output.set_verdict(Severity.CRITICAL, "broken")

        output.render("json")

        parsed = json.loads(stdout.getvalue())
        assert parsed["severity"] == "CRITICAL"
        assert parsed["exit_code"] == 2
        assert parsed["message"] == "broken"
        assert parsed["pool"]["name"] == "tank"

    def test_render_only_once(self):
        stdout = io.StringIO()
        output = Output(stdout=stdout, stderr=io.StringIO())
        output.set_verdict(Severity.OK, "fine")

        output.render()
        output.render()

        assert stdout.getvalue() == "OK fine\n"

    def test_errors_without_verdict(self):
        stdout, stderr = io.StringIO(), io.StringIO()
        output = Output(stdout=stdout, stderr=stderr)
        output.error("This probe does not support Windows.")

        output.render()

        assert stdout.getvalue() == ""
        assert "Windows" in stderr.getvalue()

    def test_usage_is_unknown_without_prefix(self):
        stdout = io.StringIO()
        output = Output(stdout=stdout, stderr=io.StringIO())
        output.set_usage("Usage: check_zpool <pool> <verbosity 1-3>")

        output.render("plain")

        assert stdout.getvalue() == "Usage: check_zpool <pool> <verbosity 1-3>\n"
        assert output.exit_code == 3
