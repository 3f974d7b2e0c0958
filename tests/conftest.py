import numpy as np
import pytest

from regionsim.config import Config, PolicyRates
from regionsim.state import CountryState, TradeRelationship
from regionsim.trade import TradeGraph

@pytest.fixture
def rng():
    return np.random.default_rng(7)

@pytest.fixture
def quiet_rates():
    """Policy rates without GDP jitter."""
    return PolicyRates(gdp_jitter=0.0)

@pytest.fixture
def base_state():
    return CountryState(country="India", year=2023, tariff_rate=15.0)

@pytest.fixture
def pair_graph():
    return TradeGraph([TradeRelationship("India", "Bangladesh", 50.0, 10.0, 80.0)],
                      ["India", "Bangladesh"])

@pytest.fixture
def small_cfg():
    return Config(
        countries=["India", "Bangladesh", "Nepal"],
        player="India",
        T=5,
        seed=11,
        initial_trade=[
            TradeRelationship("India", "Bangladesh", 8.5, 8.5, 75),
            TradeRelationship("Bangladesh", "India", 1.2, 12.0, 75),
            TradeRelationship("India", "Nepal", 6.8, 5.0, 85),
        ],
        variations={"Nepal": {"trust": 15, "connectivity": -2.0}},
    )
