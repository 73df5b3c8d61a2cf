import json
import pytest
import sys
from unittest.mock import patch

import wagers
from wagers import main
from wagerbook.core import ServiceContainer
from wagerbook.core.storage import InMemoryRepository

COMMANDS = [
    "odds", "quote", "place", "delete", "delete_match", "clear",
    "result", "match_result", "history", "summary",
]


@pytest.fixture
def mock_functions():
    patches = [patch(f"wagers.cmd_{name}", return_value=None) for name in COMMANDS]
    mocks = [p.start() for p in patches]
    yield dict(zip(COMMANDS, mocks))
    for p in patches:
        p.stop()


@pytest.fixture
def repo():
    """Route the CLI to an in-memory ledger."""
    ServiceContainer.reset()
    repo = InMemoryRepository()
    ServiceContainer.register_storage(repo)
    yield repo
    ServiceContainer.reset()


def run(*args):
    with patch.object(sys, 'argv', ["wagers.py", *args]):
        main()


@pytest.mark.parametrize("args,command_key", [
    (["odds"], "odds"),
    (["quote", "back", "10"], "quote"),
    (["place", "A vs B", "A", "back", "10"], "place"),
    (["delete", "3"], "delete"),
    (["delete-match", "A vs B"], "delete_match"),
    (["clear"], "clear"),
    (["result", "3", "B"], "result"),
    (["match-result", "A vs B", "A"], "match_result"),
    (["history"], "history"),
    (["summary"], "summary"),
])
def test_cli_command_routing(mock_functions, args, command_key):
    """Verify CLI routes commands correctly to their handler functions."""
    run(*args)
    mock_functions[command_key].assert_called_once()


def test_cli_place_args(mock_functions):
    """Test place command arguments parsing."""
    run("place", "Nadal vs Federer", "B", "lay", "12.50", "--odds", "7/4")
    args = mock_functions["place"].call_args[0][0]
    assert args.match == "Nadal vs Federer"
    assert args.side == "B"
    assert args.mode == "lay"
    assert args.stake == "12.50"
    assert args.odds == "7/4"


def test_cli_default_odds(mock_functions):
    run("quote", "lay", "5")
    assert mock_functions["quote"].call_args[0][0].odds == "10/10"


def test_cli_rejects_unknown_odds(mock_functions):
    with pytest.raises(SystemExit):
        run("place", "A vs B", "A", "back", "10", "--odds", "9/1")


def test_cli_missing_command():
    """Test behavior when no command is provided."""
    with pytest.raises(SystemExit):
        run()


class TestCliSession:
    """Commands running against an in-memory ledger."""

    def test_place_and_history(self, repo, capsys):
        run("place", "A vs B", "A", "back", "100", "--odds", "5/4")
        run("history")

        out = capsys.readouterr().out
        wager_id = json.loads(repo.payload)[0]["id"]
        assert f"#{wager_id} A vs B: SideA Back 100 @ 5/4 (win 100, lose 125.00)" in out
        assert "pending" in out
        assert repo.saves == 1

    def test_rejected_place_exits_nonzero(self, repo, capsys):
        with pytest.raises(SystemExit) as exc:
            run("place", "A vs B", "A", "back", "0")

        assert exc.value.code == 1
        assert "WARNING: non-positive stake" in capsys.readouterr().err
        assert repo.saves == 0

    def test_result(self, repo, capsys):
        run("place", "A vs B", "A", "back", "100", "--odds", "5/4")
        wager_id = json.loads(repo.payload)[0]["id"]
        run("result", str(wager_id), "B")

        out = capsys.readouterr().out
        assert "SideB won, wager lost, net -125.00" in out

    def test_clear_with_yes(self, repo, capsys):
        run("place", "A vs B", "A", "back", "10")
        run("clear", "--yes")

        assert "History cleared" in capsys.readouterr().out
        assert repo.payload == "[]"

    def test_quote_does_not_record(self, repo, capsys):
        run("quote", "lay", "100", "--odds", "3/2")

        assert "win 150.00, lose 100" in capsys.readouterr().out
        assert repo.saves == 0

    def test_odds_listing(self, capsys):
        wagers.cmd_odds(None)
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 10
        assert "7/2" in lines[-1]
