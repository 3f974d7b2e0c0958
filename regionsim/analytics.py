# regionsim/analytics.py
import dataclasses as dc
from typing import Iterable, List, Sequence
import pandas as pd

from .state import CountryState, PolicySpillover, RegionalEvent

# (column, state field)
EXPORT_COLUMNS = (
    ("Year", "year"), ("Country", "country"),
    ("GDP_Growth", "gdp_growth"), ("Unemployment", "unemployment"),
    ("Literacy_Rate", "literacy_rate"), ("Life_Expectancy", "life_expectancy"),
    ("Poverty_Rate", "poverty_rate"), ("CO2_Emissions", "co2_emissions"),
    ("Tariff_Revenue", "tariff_revenue"), ("Consumer_Welfare", "consumer_welfare"),
)

def history_frame(history: Sequence[CountryState]) -> pd.DataFrame:
    """One row per year in export layout."""
    rows = [{col: getattr(s, f) for col, f in EXPORT_COLUMNS} for s in history]
    return pd.DataFrame(rows, columns=[c for c, _ in EXPORT_COLUMNS])

def export_csv(history: Sequence[CountryState], path: str) -> pd.DataFrame:
    if not history:
        raise ValueError("No historical data to export.")
    df = history_frame(history)
    df.to_csv(path, index=False, float_format="%.2f")
    return df

def spillover_frame(spillovers: Iterable[PolicySpillover]) -> pd.DataFrame:
    return pd.DataFrame([dc.asdict(s) for s in spillovers])

def event_frame(events: Iterable[RegionalEvent]) -> pd.DataFrame:
    rows = []
    for ev in events:
        rows.append({"year": ev.year, "id": ev.id, "name": ev.name,
                     "targets": ",".join(ev.target_countries),
                     "effects": ",".join(f"{k}={v:+g}" for k, v in ev.effects.items())})
    return pd.DataFrame(rows, columns=["year", "id", "name", "targets", "effects"])

def summarize(df: pd.DataFrame, name: str, print_: bool = False) -> dict:
    if df.empty: return {}
    end = int(df["year"].max())
    final = df[df["year"] == end].set_index("country")
    out = {
        "name": name, "end_year": end,
        "mean_gdp_growth": float(df["gdp_growth"].mean()),
        "final_mean_gdp_growth": float(final["gdp_growth"].mean()),
        "final_mean_poverty": float(final["poverty_rate"].mean()),
        "years_with_events": int((df.groupby("year")["events"].apply(lambda s: (s != "").any())).sum()),
        "mean_cooperation": float(df.groupby("year")["cooperation_index"].first().mean()),
    }
    if print_:
        print(f"\n== {name} Summary ==")
        print(f"  Final year: {out['end_year']}")
        print(f"  Mean GDP growth: {out['mean_gdp_growth']:.2f}%")
        print(f"  Final mean poverty: {out['final_mean_poverty']:.2f}%")
        print(f"  Years with events: {out['years_with_events']}")
        print(f"  Mean cooperation: {out['mean_cooperation']:.1f}")
    return out

def top_partners_by_effect(spillovers: List[PolicySpillover], n: int = 5) -> pd.DataFrame:
    df = spillover_frame(spillovers)
    if df.empty: return df
    agg = df.groupby(["source_country", "target_country"])["effect"].sum().reset_index()
    return agg.reindex(agg["effect"].abs().sort_values(ascending=False).index).head(n)
