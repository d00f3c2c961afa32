"""Tests for the command-line tool."""
import httpx
import pytest
from unittest.mock import AsyncMock, patch

from chiptracker import cli


SUMMARY = {
    "summary": {
        "Alice": {"chipsPurchased": 0, "chipsReceived": 30, "chipsGiven": 0, "currentChips": 30},
        "Bob": {"chipsPurchased": 100, "chipsReceived": 0, "chipsGiven": 30, "currentChips": 70},
    },
    "bankSummary": {"chipsIssued": 100, "cashReceived": 100, "iouAmount": 0},
    "settlements": [{"from": "Bob", "to": "Alice", "amount": 30}],
}


def run_cli(*args: str) -> None:
    """Run the CLI entry point with the given arguments."""
    with patch.object(cli.sys, "argv", ["chiptracker", *args]):
        cli.main()


class TestCli:
    """Test CLI commands."""

    def test_no_command(self, capsys):
        """Test running without a command prints usage and fails."""
        with pytest.raises(SystemExit) as exc:
            run_cli()

        assert exc.value.code == 1
        assert "Usage:" in capsys.readouterr().out

    def test_unknown_command(self, capsys):
        """Test unknown commands fail."""
        with pytest.raises(SystemExit):
            run_cli("explode")

        assert "Unknown command: explode" in capsys.readouterr().out

    def test_summary_requires_code(self, capsys):
        """Test summary without a code fails."""
        with pytest.raises(SystemExit):
            run_cli("summary")

        assert "Session code required" in capsys.readouterr().out

    def test_summary(self, capsys):
        """Test the summary table is printed."""
        with patch.object(cli, "_get_json", AsyncMock(return_value=SUMMARY)) as mock_get:
            run_cli("summary", "abc123")

        mock_get.assert_awaited_once_with("/api/sessions/abc123/summary")
        out = capsys.readouterr().out
        assert "Session ABC123" in out
        assert "Bob owes Alice 30" in out

    def test_summary_unknown_session(self, capsys):
        """Test a 404 from the server is reported as an error."""
        request = httpx.Request("GET", "http://test/api/sessions/NOPE00/summary")
        response = httpx.Response(404, json={"detail": "Invalid game code."}, request=request)
        error = httpx.HTTPStatusError("not found", request=request, response=response)

        with patch.object(cli, "_get_json", AsyncMock(side_effect=error)):
            with pytest.raises(SystemExit) as exc:
                run_cli("summary", "NOPE00")

        assert exc.value.code == 1
        assert "Error: Invalid game code." in capsys.readouterr().out

    def test_transactions(self, capsys):
        """Test the transaction log is printed."""
        data = {"transactions": [
            {"id": 1, "type": "buy", "from": "bank", "to": "Bob", "amount": 100, "paymentType": "cash"},
            {"id": 2, "type": "transfer", "from": "Bob", "to": "Alice", "amount": 30, "paymentType": "iou"},
        ]}

        with patch.object(cli, "_get_json", AsyncMock(return_value=data)):
            run_cli("transactions", "ABC123")

        out = capsys.readouterr().out
        assert "transfer" in out
        assert "Total: 2 transactions" in out

    def test_transactions_empty(self, capsys):
        """Test an empty log is reported."""
        with patch.object(cli, "_get_json", AsyncMock(return_value={"transactions": []})):
            run_cli("transactions", "ABC123")

        assert "No transactions recorded." in capsys.readouterr().out
