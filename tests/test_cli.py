import builtins
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import cli


def feed(monkeypatch, answers):
    replies = iter(answers)
    monkeypatch.setattr(builtins, "input", lambda prompt="": next(replies, ""))


def test_collect_inputs_defaults(monkeypatch):
    feed(monkeypatch, [])
    quick = cli.collect_inputs()
    assert quick.total_debt == 300_000
    assert quick.specialty == "internal_medicine"
    assert quick.current_stage == "pgy1"
    assert quick.pslf_eligible is True
    assert quick.married is False
    assert quick.spouse_income is None


def test_collect_inputs_parses_formatted_amounts(monkeypatch):
    feed(monkeypatch, ["$425,000", "cardiology", "pgy3", "no", "yes", "120,000"])
    quick = cli.collect_inputs()
    assert quick.total_debt == 425_000
    assert quick.specialty == "cardiology"
    assert quick.current_stage == "pgy3"
    assert quick.pslf_eligible is False
    assert quick.spouse_income == 120_000


def test_amount_prompt_rejects_unparseable_input(monkeypatch, capsys):
    feed(monkeypatch, ["abc", "250,000"])
    quick = cli.collect_inputs()
    assert quick.total_debt == 250_000
    assert "Invalid number, try again." in capsys.readouterr().out


def test_aggressive_inputs_skipped_by_default(monkeypatch):
    feed(monkeypatch, [])
    quick = cli.collect_inputs()
    assert cli.collect_aggressive_inputs(quick) is None


def test_run_cli_prints_recommendation(monkeypatch, capsys):
    # defaults for the quick-start questions, then opt into aggressive payoff
    feed(monkeypatch, ["", "", "", "", "", "yes", "", "", ""])
    cli.run_cli()
    out = capsys.readouterr().out
    assert "STRATEGIES RANKED BY NPV" in out
    assert "RECOMMENDATION" in out
    assert "PSLF" in out
    assert "AGGRESSIVE PAYOFF" in out
    assert "YOUR SITUATION" in out
    assert "PSLF: Public Service Loan Forgiveness" in out
    assert "—" not in out
