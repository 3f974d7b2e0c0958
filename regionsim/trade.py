# regionsim/trade.py
from __future__ import annotations
import logging
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple
import networkx as nx

from .config import TradeRates
from .state import TradeRelationship
from .utils import clip_to, mean_or0

logger = logging.getLogger(__name__)

class TradeGraphError(ValueError):
    """Malformed trade relationship (self-loop or duplicate directed edge)."""

class TradeGraph:
    """Directed, weighted graph of bilateral trade relationships."""

    def __init__(self, relationships: Iterable[TradeRelationship] = (), countries: Iterable[str] = ()):
        self.G = nx.DiGraph()
        self.G.add_nodes_from(countries)
        for rel in relationships:
            if rel.source == rel.target:
                raise TradeGraphError(f"Self-loop trade edge for {rel.source!r}")
            if self.G.has_edge(rel.source, rel.target):
                raise TradeGraphError(f"Duplicate trade edge {rel.source!r} -> {rel.target!r}")
            self.G.add_edge(rel.source, rel.target,
                            trade_volume=float(rel.trade_volume),
                            tariff_rate=float(rel.tariff_rate),
                            cooperation=float(rel.cooperation))

    @staticmethod
    def _rel(u: str, v: str, d: dict) -> TradeRelationship:
        return TradeRelationship(u, v, d["trade_volume"], d["tariff_rate"], d["cooperation"])

    def relationships(self) -> List[TradeRelationship]:
        return [self._rel(u, v, d) for u, v, d in self.G.edges(data=True)]

    def __iter__(self) -> Iterator[TradeRelationship]:
        return iter(self.relationships())

    def __len__(self) -> int:
        return self.G.number_of_edges()

    @property
    def countries(self) -> List[str]:
        return list(self.G.nodes)

    def edge(self, source: str, target: str) -> Optional[TradeRelationship]:
        if not self.G.has_edge(source, target): return None
        return self._rel(source, target, self.G.edges[source, target])

    def edges_touching(self, country: str) -> List[TradeRelationship]:
        """Every edge with ``country`` at either end: outgoing first, then incoming."""
        if country not in self.G: return []
        out = [self._rel(u, v, d) for u, v, d in self.G.out_edges(country, data=True)]
        inc = [self._rel(u, v, d) for u, v, d in self.G.in_edges(country, data=True)]
        return out + inc

    def partners(self, country: str) -> List[str]:
        seen: Dict[str, None] = {}
        for rel in self.edges_touching(country):
            seen[rel.target if rel.source == country else rel.source] = None
        return list(seen)

    def average_cooperation(self) -> float:
        return mean_or0([d["cooperation"] for _, _, d in self.G.edges(data=True)])

    def updated(self, policy_changes: Mapping[str, Mapping[str, float]],
                rates: Optional[TradeRates] = None) -> 'TradeGraph':
        """
        Next year's trade graph. ``policy_changes`` maps country ->
        {trade_openness, infrastructure_investment, cooperation_policy}.
        """
        r = rates or TradeRates()
        new_rels = []
        for rel in self.relationships():
            src = policy_changes.get(rel.source, {})
            dst = policy_changes.get(rel.target, {})
            volume, tariff, coop = rel.trade_volume, rel.tariff_rate, rel.cooperation

            if src.get("trade_openness"):
                openness = src["trade_openness"] / 100.0
                volume *= (1.0 + openness * r.openness_volume)
                tariff *= (1.0 - openness * r.openness_tariff)

            if src.get("infrastructure_investment") or dst.get("infrastructure_investment"):
                avg_infra = (src.get("infrastructure_investment", 0.0) + dst.get("infrastructure_investment", 0.0)) / 2.0
                volume *= (1.0 + (avg_infra - r.infra_baseline) * r.infra_volume)

            if src.get("cooperation_policy"):
                coop += src["cooperation_policy"]

            new_rels.append(TradeRelationship(
                rel.source, rel.target,
                trade_volume=clip_to(volume, 0.0, r.max_volume),
                tariff_rate=clip_to(tariff, 0.0, r.max_tariff),
                cooperation=clip_to(coop, 0.0, r.max_cooperation),
            ))
        logger.debug("Trade graph updated: %d edges, avg cooperation %.1f", len(new_rels),
                     mean_or0([x.cooperation for x in new_rels]))
        return TradeGraph(new_rels, self.countries)

def has_energy_trade(a: str, b: str, pairs: Iterable[Tuple[str, str]]) -> bool:
    return any((p == a and q == b) or (p == b and q == a) for p, q in pairs)
