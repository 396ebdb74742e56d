"""
Tests for the command line companion.
"""

import json

import pytest
from main import main


@pytest.fixture
def run(tmp_path, capsys):
    """Run the CLI against a temp data directory and return (code, stdout)."""
    data_dir = str(tmp_path / "data")

    def _run(*argv):
        code = main(["--data-dir", data_dir, *argv])
        return code, capsys.readouterr().out

    return _run


def test_join_and_reveal_role(run):
    code, out = run("join", "game123", "4", "--players", "4", "--name", "Asha")
    assert code == 0
    assert "Room: GAME123 | Round: 1 | Players: 4 | You: #4 (Asha)" in out

    code, out = run("role")
    assert code == 0
    assert "Your role: WAZIR" in out
    assert "Tip: Detect and identify the CHOR." in out


def test_role_requires_join(run):
    code, out = run("role")
    assert code == 1
    assert "Run 'join' first" in out


def test_join_rejects_bad_player_number(run):
    code, out = run("join", "GAME123", "9", "--players", "4")
    assert code == 1
    assert "Invalid player number 9" in out


def test_end_round_and_scores(run):
    run("join", "GAME123", "4", "--players", "4")

    code, out = run("end-round", "correct", "--yes")
    assert code == 0
    assert "Player 4 (WAZIR): +5" in out
    assert "CHOR was player 2. 9 points handed out." in out
    assert "Next round: 2" in out

    code, out = run("scores")
    assert "Round: 2" in out
    assert "Player 4 (you): 5" in out


def test_end_round_cancelled(run, monkeypatch):
    run("join", "GAME123", "4", "--players", "4")
    monkeypatch.setattr("builtins.input", lambda prompt: "n")

    code, out = run("end-round", "wrong")
    assert code == 0
    assert "Cancelled. No points applied." in out

    code, out = run("scores")
    assert "Round: 1" in out


def test_skip_round(run):
    run("join", "GAME123", "1", "--players", "4")
    code, out = run("skip-round")
    assert code == 0
    assert "Next round: 2" in out


def test_export_import(run, tmp_path):
    run("join", "GAME123", "1", "--players", "4")
    run("end-round", "wrong", "--yes")
    export_path = tmp_path / "scores.json"

    code, out = run("export", "-o", str(export_path))
    assert code == 0
    bundle = json.loads(export_path.read_text())
    assert bundle["roomCode"] == "GAME123"
    assert bundle["scoreboard"] == {"1": 0, "2": 6, "3": 0, "4": -1}

    run("clear")
    code, out = run("import", str(export_path))
    assert code == 0
    assert "Scoreboard imported for room: GAME123" in out

    code, out = run("scores")
    assert "Player 2: 6" in out


def test_import_malformed(run, tmp_path):
    path = tmp_path / "bad.json"
    path.write_text('{"scoreboard": {}}')

    code, out = run("import", str(path))
    assert code == 1
    assert "Import failed: Invalid scoreboard data: missing roomCode" in out


def test_scoring_commands(run):
    code, out = run("scoring", "set", "wrong", "CHOR", "8")
    assert code == 0
    assert "CHOR: +8" in out

    code, out = run("scoring", "show")
    assert "CHOR: +8" in out

    code, out = run("scoring", "reset")
    assert "CHOR: +6" in out
