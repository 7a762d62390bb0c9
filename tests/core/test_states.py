"""Tests for plugin states and health classification."""

import pytest

from checkzpool.core.states import Severity, classify_health, escalate


class TestSeverity:
    """Tests for the state table."""

    def test_exit_codes(self):
        assert Severity.OK.exit_code == 0
        assert Severity.WARNING.exit_code == 1
        assert Severity.CRITICAL.exit_code == 2
        assert Severity.UNKNOWN.exit_code == 3
        assert Severity.DEPENDENT.exit_code == 4


class TestClassifyHealth:
    """Tests for classify_health."""

    def test_online_is_ok(self):
        assert classify_health("ONLINE") is Severity.OK

    def test_degraded_is_warning(self):
        assert classify_health("DEGRADED") is Severity.WARNING

    @pytest.mark.parametrize("keyword", ["FAULTED", "OFFLINE", "UNAVAIL", "REMOVED", "SUSPENDED", "online"])
    def test_everything_else_is_critical(self, keyword):
        assert classify_health(keyword) is Severity.CRITICAL


class TestEscalate:
    """Tests for the escalation transition."""

    def test_unavail_on_ok_escalates_and_bumps_verbosity(self):
        assert escalate(Severity.OK, 1, "UNAVAIL") == (Severity.WARNING, 2)

    @pytest.mark.parametrize("verbosity", [2, 3])
    def test_higher_verbosity_kept(self, verbosity):
        assert escalate(Severity.OK, verbosity, "UNAVAIL") == (Severity.WARNING, verbosity)

    def test_other_states_leave_ok(self):
        assert escalate(Severity.OK, 1, "FAULTED") == (Severity.OK, 1)

    @pytest.mark.parametrize("severity", [Severity.WARNING, Severity.CRITICAL])
    def test_never_downgrades_or_changes_non_ok(self, severity):
        assert escalate(severity, 1, "UNAVAIL") == (severity, 1)

    def test_escalation_is_idempotent(self):
        state = escalate(Severity.OK, 1, "UNAVAIL")
        assert escalate(*state, "UNAVAIL") == state
