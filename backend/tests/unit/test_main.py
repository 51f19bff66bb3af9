"""Unit tests for the command line entry point."""

import json

import pytest

from audit_guard.adapters.gemini import GeminiScoringClient
from audit_guard.core.assessment import AssessmentSucceeded
from audit_guard.core.workspace import FAILURE_MESSAGE, AuditWorkspace
from audit_guard.main import build_parser, main


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    for key in ("GOOGLE_API_KEY", "API_KEY", "SEED_PATH", "LOG_LEVEL", "LOG_FORMAT", "CURRENCY"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestParser:
    """Tests for argument parsing."""

    def test_analyze_with_decision(self):
        args = build_parser().parse_args(["analyze", "TRX-001", "TRX-002", "--approve"])
        assert args.command == "analyze"
        assert args.ids == ["TRX-001", "TRX-002"]
        assert args.decision == "approve"

    def test_approve_and_reject_are_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["analyze", "TRX-001", "--approve", "--reject"])

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestMain:
    """Tests for main()."""

    def test_list(self, capsys):
        assert main(["list"]) == 0
        out = capsys.readouterr().out
        assert "TRX-001" in out
        assert "TRX-006" in out

    def test_list_search(self, capsys):
        assert main(["list", "--search", "stationery"]) == 0
        out = capsys.readouterr().out
        assert "TRX-002" in out
        assert "TRX-001" not in out

    def test_summary(self, capsys):
        assert main(["summary"]) == 0
        out = capsys.readouterr().out
        assert "Transactions:   6" in out
        assert "Pending review: 6" in out
        assert "Total volume:   IDR 390,450,000" in out

    def test_seed_path_from_env(self, capsys, monkeypatch, isolated_env, sample_transaction):
        path = isolated_env / "ledger.json"
        path.write_text(json.dumps([sample_transaction.model_dump(mode="json")]))
        monkeypatch.setenv("SEED_PATH", str(path))

        assert main(["summary"]) == 0
        assert "Transactions:   1" in capsys.readouterr().out

    def test_bad_seed_file(self, capsys, monkeypatch, isolated_env):
        monkeypatch.setenv("SEED_PATH", str(isolated_env / "absent.json"))

        assert main(["list"]) == 1
        assert "Error loading session" in capsys.readouterr().err

    def test_analyze_without_credentials_fails_gracefully(self, capsys):
        assert main(["analyze", "TRX-001"]) == 1
        captured = capsys.readouterr()
        assert FAILURE_MESSAGE in captured.err
        assert "TransportFailure" in captured.err
        assert "Pending review: 6" in captured.out

    def test_analyze_connection_error_fails_gracefully(self, capsys, mocker, monkeypatch):
        monkeypatch.setenv("GOOGLE_API_KEY", "test-key")
        mocker.patch.object(
            GeminiScoringClient,
            "generate",
            new=mocker.AsyncMock(side_effect=ConnectionResetError("peer reset")),
        )

        assert main(["analyze", "TRX-001"]) == 1
        captured = capsys.readouterr()
        assert FAILURE_MESSAGE in captured.err
        assert "TransportFailure" in captured.err

    def test_analyze_unknown_id(self, capsys):
        assert main(["analyze", "TRX-999"]) == 1
        assert "not found" in capsys.readouterr().err

    def test_analyze_and_approve(self, capsys, mocker, high_risk_assessment):
        async def fake_run_analysis(self, transaction_id):
            self.store.replace(self.store.get_by_id(transaction_id).with_assessment(high_risk_assessment))
            return AssessmentSucceeded(high_risk_assessment)

        mocker.patch.object(AuditWorkspace, "run_analysis", fake_run_analysis)

        assert main(["analyze", "TRX-001", "--approve"]) == 0
        out = capsys.readouterr().out
        assert "TRX-001: score=88 level=HIGH anomaly=yes" in out
        assert "#QuantitativeVariance" in out
        assert "Approved:       1" in out
        assert "High risk:      1" in out
