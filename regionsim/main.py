# regionsim/main.py
import argparse
import logging
from copy import deepcopy
from typing import Dict, List, Optional

from regionsim.analytics import event_frame, export_csv, summarize, top_partners_by_effect
from regionsim.catalog import IndicatorTable, TradeProductCatalog
from regionsim.config import Config
from regionsim.engine import RegionalSimulation
from regionsim.policies import policy_adaptive, policy_hold
from regionsim.state import TradeRelationship

COUNTRIES = ["India", "Bangladesh", "Pakistan", "Sri Lanka", "Nepal", "Bhutan", "Maldives", "Afghanistan"]

def initial_trade_matrix() -> List[TradeRelationship]:
    # Volumes are % of the exporter's trade; tariffs are applied averages.
    T = TradeRelationship
    return [
        # India (regional hub)
        T("India", "Bangladesh", 8.5, 8.5, 75),
        T("India", "Pakistan", 2.1, 25.0, 35),
        T("India", "Sri Lanka", 4.7, 12.0, 80),
        T("India", "Nepal", 6.8, 5.0, 85),
        T("India", "Bhutan", 12.5, 0.0, 95),
        T("India", "Maldives", 4.2, 10.0, 70),
        T("India", "Afghanistan", 1.5, 15.0, 45),
        # Bangladesh
        T("Bangladesh", "India", 1.2, 12.0, 75),
        T("Bangladesh", "Pakistan", 0.2, 20.0, 60),
        T("Bangladesh", "Sri Lanka", 0.05, 15.0, 65),
        T("Bangladesh", "Nepal", 0.03, 18.0, 70),
        # Pakistan
        T("Pakistan", "India", 0.4, 30.0, 35),
        T("Pakistan", "Bangladesh", 0.1, 18.0, 60),
        T("Pakistan", "Sri Lanka", 0.3, 12.0, 70),
        T("Pakistan", "Afghanistan", 1.8, 8.0, 80),
        # Smaller economies
        T("Sri Lanka", "India", 1.1, 10.0, 80),
        T("Sri Lanka", "Pakistan", 0.2, 14.0, 70),
        T("Nepal", "India", 0.7, 3.0, 85),
        T("Bhutan", "India", 0.4, 0.0, 95),
        T("Maldives", "India", 0.02, 8.0, 70),
        T("Afghanistan", "Pakistan", 0.3, 10.0, 80),
        T("Afghanistan", "India", 0.1, 18.0, 45),
    ]

def create_south_asia_config(player: Optional[str] = None, T: int = 20, seed: int = 42) -> Config:
    # --- Policy stance offsets on the regional defaults ---
    variations: Dict[str, Dict[str, float]] = {
        "India":       {"connectivity": 2.0, "trust": 5},
        "Pakistan":    {"tariffs": 5, "trust": -10},
        "Bangladesh":  {"connectivity": 3.0, "ntbs": -10},
        "Sri Lanka":   {"tariffs": -3, "trust": 10},
        "Nepal":       {"connectivity": -2.0, "trust": 15},
        "Bhutan":      {"trust": 20},
        "Maldives":    {"ntbs": -15, "connectivity": -1.0},
        "Afghanistan": {"trust": -20, "tariffs": 10},
    }

    # --- Initial conditions (approximate 2023 baselines) ---
    initial_stats = {
        "India":       {"gdp_growth": 7.2, "unemployment": 4.2, "literacy_rate": 77.0, "life_expectancy": 70.2,
                        "poverty_rate": 11.9, "co2_emissions": 1.9, "population": 1.43e9, "infant_mortality": 26.0},
        "Bangladesh":  {"gdp_growth": 5.8, "unemployment": 5.1, "literacy_rate": 75.6, "life_expectancy": 72.4,
                        "poverty_rate": 18.7, "co2_emissions": 0.6, "population": 1.73e8, "infant_mortality": 23.0},
        "Pakistan":    {"gdp_growth": -0.2, "unemployment": 8.5, "literacy_rate": 58.0, "life_expectancy": 66.4,
                        "poverty_rate": 39.4, "co2_emissions": 0.9, "population": 2.4e8, "infant_mortality": 52.0},
        "Sri Lanka":   {"gdp_growth": -2.3, "unemployment": 4.7, "literacy_rate": 92.4, "life_expectancy": 76.4,
                        "poverty_rate": 25.0, "co2_emissions": 0.9, "population": 2.2e7, "infant_mortality": 5.8},
        "Nepal":       {"gdp_growth": 1.9, "unemployment": 10.7, "literacy_rate": 71.2, "life_expectancy": 70.5,
                        "poverty_rate": 20.3, "co2_emissions": 0.5, "population": 3.08e7, "infant_mortality": 23.0},
        "Bhutan":      {"gdp_growth": 4.6, "unemployment": 3.5, "literacy_rate": 70.9, "life_expectancy": 72.2,
                        "poverty_rate": 8.2, "co2_emissions": 1.8, "population": 7.8e5, "infant_mortality": 21.0},
        "Maldives":    {"gdp_growth": 4.0, "unemployment": 4.5, "literacy_rate": 97.7, "life_expectancy": 80.8,
                        "poverty_rate": 5.4, "co2_emissions": 3.4, "population": 5.2e5, "infant_mortality": 5.0},
        "Afghanistan": {"gdp_growth": -6.2, "unemployment": 14.4, "literacy_rate": 37.3, "life_expectancy": 62.9,
                        "poverty_rate": 47.3, "co2_emissions": 0.3, "population": 4.2e7, "infant_mortality": 43.0},
    }

    return Config(
        countries=list(COUNTRIES),
        player=player,
        T=T,
        seed=seed,
        initial_trade=initial_trade_matrix(),
        initial_cooperation=65.0,
        variations=variations,
        initial_stats=initial_stats,
    )

def run_comparison(base_cfg: Config, catalog=None, indicators=None):
    print("\n>>> Running policy comparison: Hold vs Adaptive <<<")
    results = {}
    for name, policy in (("Hold", policy_hold), ("Adaptive", policy_adaptive)):
        print(f"  > Simulating {name}...")
        sim = RegionalSimulation(deepcopy(base_cfg), catalog=catalog, indicators=indicators)
        df = sim.run(policy=policy)
        results[name] = {"sim": sim, "df": df, "summary": summarize(df, name, print_=True)}
    return results

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="regionsim", description="South Asia regional policy simulation")
    p.add_argument("--player", choices=COUNTRIES, default=None, help="country to score and export")
    p.add_argument("--years", type=int, default=20)
    p.add_argument("--seed", type=int, default=42)
    p.add_argument("--trade-products", metavar="JSON", help="trade products reference file")
    p.add_argument("--indicators", metavar="CSV", help="long-format indicator table")
    p.add_argument("--csv", metavar="PATH", help="export the player's history as CSV")
    p.add_argument("--compare", action="store_true", help="compare hold and adaptive policies")
    p.add_argument("-v", "--verbose", action="store_true")
    return p

def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")

    cfg = create_south_asia_config(player=args.player, T=args.years, seed=args.seed)
    catalog = TradeProductCatalog.from_json(args.trade_products) if args.trade_products else None
    indicators = IndicatorTable.from_csv(args.indicators) if args.indicators else None

    if args.compare:
        run_comparison(cfg, catalog, indicators)
        return 0

    sim = RegionalSimulation(cfg, catalog=catalog, indicators=indicators)
    df = sim.run(policy=policy_adaptive)
    summarize(df, "Adaptive", print_=True)

    print(f"  Average bilateral cooperation: {sim.trade.average_cooperation():.1f}")
    top = top_partners_by_effect(sim.spillover_log)
    if not top.empty:
        print("\nStrongest spillover channels:")
        print(top.to_string(index=False))

    ev = event_frame(sim.event_history)
    if not ev.empty:
        print("\nRegional events:")
        print(ev.to_string(index=False))

    if cfg.player:
        print(f"\nFinal score for {cfg.player}: {sim.final_score():.0f} / 1000")
        if sim.detailed_spillovers:
            print(f"  Detailed spillovers last year: {len(sim.detailed_spillovers)}")
        if args.csv:
            export_csv(sim.player_history, args.csv)
            print(f"  > History written to {args.csv}")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
