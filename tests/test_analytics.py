import pandas as pd
import pytest

from regionsim.analytics import (
    EXPORT_COLUMNS, event_frame, export_csv, spillover_frame, summarize, top_partners_by_effect,
)
from regionsim.engine import RegionalSimulation
from regionsim.main import create_south_asia_config, main
from regionsim.state import PolicySpillover

def test_export_csv_columns_and_rounding(small_cfg, tmp_path):
    sim = RegionalSimulation(small_cfg)
    sim.run(years=3)
    path = tmp_path / "india.csv"
    export_csv(sim.player_history, str(path))
    df = pd.read_csv(path)
    assert list(df.columns) == [c for c, _ in EXPORT_COLUMNS]
    assert list(df["Year"]) == [2023, 2024, 2025, 2026]
    assert (df["Country"] == "India").all()
    raw = path.read_text().splitlines()[1].split(",")
    assert all(len(x.split(".")[1]) == 2 for x in raw[2:])

def test_export_csv_needs_history(tmp_path):
    with pytest.raises(ValueError):
        export_csv([], str(tmp_path / "x.csv"))

def test_summarize(small_cfg):
    sim = RegionalSimulation(small_cfg)
    df = sim.run()
    out = summarize(df, "Hold")
    assert out["end_year"] == small_cfg.end_year
    assert out["years_with_events"] == event_frame(sim.event_history)["year"].nunique()
    assert summarize(pd.DataFrame(), "Empty") == {}

def test_south_asia_config():
    cfg = create_south_asia_config(player="Nepal", T=3)
    assert len(cfg.countries) == 8 and len(cfg.initial_trade) == 22
    assert cfg.end_year == 2026
    sim = RegionalSimulation(cfg)
    assert len(sim.trade) == 22

def test_cli_runs(tmp_path, capsys):
    out = tmp_path / "history.csv"
    assert main(["--player", "Bhutan", "--years", "2", "--csv", str(out)]) == 0
    assert out.exists()
    assert "Final score for Bhutan" in capsys.readouterr().out

def test_spillover_tables():
    sps = [PolicySpillover("India", "Nepal", "trade_gdp", 0.4, "", "high", "short-term"),
           PolicySpillover("India", "Nepal", "infrastructure", -0.1, "", "medium", "medium-term"),
           PolicySpillover("Pakistan", "India", "trade_gdp", -0.5, "", "high", "short-term")]
    assert len(spillover_frame(sps)) == 3
    top = top_partners_by_effect(sps, n=2)
    assert list(zip(top["source_country"], top["target_country"])) == [("Pakistan", "India"), ("India", "Nepal")]
    assert top["effect"].tolist() == pytest.approx([-0.5, 0.3])
    assert top_partners_by_effect([]).empty
