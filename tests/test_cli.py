from __future__ import annotations


def _answers(*values):
    it = iter(values)
    return lambda prompt: next(it)


def test_quiet_run_prints_summary(run_draw_module, capsys):
    code = run_draw_module.main(["--tickets", "20", "--date", "01-01-2025", "--quiet", "--seed", "3"])

    out = capsys.readouterr().out
    assert code == 0
    assert "Total tickets played: 20" in out
    assert "Ticket #" not in out


def test_verbose_run_prints_tickets(run_draw_module, capsys):
    code = run_draw_module.main(["--tickets", "2", "--date", "01-01-25", "--verbose", "--seed", "1"])

    out = capsys.readouterr().out
    assert code == 0
    assert "Winning grid" in out
    assert "Ticket #1" in out
    assert "Ticket #2" in out


def test_prompts_until_input_is_valid(run_draw_module, capsys):
    ask = _answers("0", "abc", "5", "31-02-2025", "01-03-2025", "maybe", "n")

    code = run_draw_module.main([], ask=ask)

    out = capsys.readouterr().out
    assert code == 0
    assert "Draw date: 01-03-2025" in out
    assert "Total tickets played: 5" in out


def test_invalid_date_option_fails(run_draw_module):
    assert run_draw_module.main(["--tickets", "2", "--date", "2025-01-01", "--quiet"]) == 2


def test_out_of_range_ticket_option_fails(run_draw_module):
    assert run_draw_module.main(["--tickets", "0", "--date", "01-01-2025", "--quiet"]) == 2


def test_sharded_run_counts_every_ticket_on_the_bar(run_draw_module, monkeypatch, capsys):
    bars = []
    real_tqdm = run_draw_module.tqdm

    def _tqdm(*args, **kwargs):
        kwargs["disable"] = False
        bar = real_tqdm(*args, **kwargs)
        bars.append(bar)
        return bar

    monkeypatch.setattr(run_draw_module, "tqdm", _tqdm)

    code = run_draw_module.main(
        ["--tickets", "600", "--date", "01-01-2025", "--quiet", "--workers", "4", "--seed", "9"]
    )

    assert code == 0
    assert bars[0].n == 600
