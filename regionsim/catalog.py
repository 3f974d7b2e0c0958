# regionsim/catalog.py
from __future__ import annotations
import json
import logging
from typing import Dict, List, Optional, Tuple
import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

class ReferenceDataError(RuntimeError):
    """Reference data was used before it was loaded."""

class TradeProductCatalog:
    """
    Bilateral trade products: ``imports[importer][exporter]`` and
    ``exports[exporter][importer]`` are lists of product names.

    Nothing is read lazily; an unloaded catalog refuses every query.
    """

    def __init__(self, data: Optional[dict] = None):
        self._data: Optional[dict] = None
        if data is not None:
            self._set(data)

    def _set(self, data: dict):
        self._data = {"imports": dict(data.get("imports", {})), "exports": dict(data.get("exports", {}))}

    @classmethod
    def from_json(cls, path: str) -> 'TradeProductCatalog':
        cat = cls()
        cat.load(path)
        return cat

    def load(self, path: str) -> None:
        with open(path, "r", encoding="utf-8") as fh:
            self._set(json.load(fh))
        logger.info("Loaded trade products for %d importers from %s", len(self._data["imports"]), path)

    @property
    def loaded(self) -> bool:
        return self._data is not None

    def require_loaded(self) -> dict:
        if self._data is None:
            raise ReferenceDataError("Trade products data not loaded; call load() first.")
        return self._data

    def import_products(self, importer: str, exporter: str) -> List[str]:
        return list(self.require_loaded()["imports"].get(importer, {}).get(exporter, []))

    def export_products(self, exporter: str, importer: str) -> List[str]:
        return list(self.require_loaded()["exports"].get(exporter, {}).get(importer, []))

    def trading_partners(self, country: str) -> List[str]:
        data = self.require_loaded()
        partners = dict.fromkeys(data["imports"].get(country, {}))
        partners.update(dict.fromkeys(data["exports"].get(country, {})))
        return list(partners)

    def main_trade_products(self, country: str, partner: str) -> Tuple[List[str], List[str], List[str]]:
        """(imports, exports, unique union in first-seen order)."""
        imports = self.import_products(country, partner)
        exports = self.export_products(country, partner)
        return imports, exports, list(dict.fromkeys(imports + exports))

    def trade_intensity(self, country: str, partner: str) -> float:
        n = len(self.import_products(country, partner)) + len(self.export_products(country, partner))
        return float(min(100.0, n * 5.0))

class IndicatorTable:
    """Long-format indicator table with columns indicator, country, year, value."""

    COLUMNS = ("indicator", "country", "year", "value")

    def __init__(self, df: Optional[pd.DataFrame] = None):
        self.df: Optional[pd.DataFrame] = None
        if df is not None:
            self._set(df)

    def _set(self, df: pd.DataFrame):
        missing = [c for c in self.COLUMNS if c not in df.columns]
        if missing:
            raise ValueError(f"Indicator table is missing columns: {missing}")
        df = df.loc[:, list(self.COLUMNS)].copy()
        df["year"] = df["year"].astype(int)
        df["value"] = pd.to_numeric(df["value"], errors="coerce")
        self.df = df.dropna(subset=["value"])

    @classmethod
    def from_csv(cls, path: str) -> 'IndicatorTable':
        table = cls()
        table.load(path)
        return table

    def load(self, path: str) -> None:
        self._set(pd.read_csv(path))
        logger.info("Loaded %d indicator rows from %s", len(self.df), path)

    @property
    def loaded(self) -> bool:
        return self.df is not None

    def require_loaded(self) -> pd.DataFrame:
        if self.df is None:
            raise ReferenceDataError("Indicator data not loaded; call load() first.")
        return self.df

    def _rows(self, indicator: str, country: str) -> pd.DataFrame:
        df = self.require_loaded()
        return df[(df["indicator"] == indicator) & (df["country"] == country)]

    def value(self, indicator: str, country: str, year: int) -> Optional[float]:
        rows = self._rows(indicator, country)
        hit = rows[rows["year"] == int(year)]
        if hit.empty: return None
        return float(hit["value"].iloc[-1])

    def latest(self, indicator: str, country: str) -> Optional[float]:
        rows = self._rows(indicator, country)
        if rows.empty: return None
        return float(rows.sort_values("year")["value"].iloc[-1])

    def lookup(self, indicator: str, country: str, year: int) -> Optional[float]:
        """Exact year if present, else the latest known value."""
        val = self.value(indicator, country, year)
        if val is None or not np.isfinite(val):
            val = self.latest(indicator, country)
        return val
