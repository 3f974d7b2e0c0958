# regionsim/constants.py
from typing import Dict, Optional, Tuple

# --- Policy Levers (decision ids) ---
EDUCATION     = "education"
HEALTH        = "health"
CONNECTIVITY  = "connectivity"
AGRICULTURE   = "agriculture"
MANUFACTURING = "manufacturing"
SERVICES      = "services"
ENERGY        = "energy"
TECHNOLOGY    = "technology"
TOURISM       = "tourism"
ENVIRONMENT   = "environment"
TRADE         = "trade"
TARIFFS       = "tariffs"
NTBS          = "ntbs"
TRUST         = "trust"

# Legacy / alternative decision ids
DECISION_ALIASES: Dict[str, str] = {
    "infrastructure": CONNECTIVITY,
    "tariff":         TARIFFS,
    "cooperation":    TRUST,
    "trade_openness": TRADE,
}

# --- Spillover Policy Types ---
TRADE_GDP = "trade_gdp"
INFRA     = "infrastructure"
ENV       = "environment"
MANUF     = "manufacturing"
TECH      = "technology"
POWER     = "energy"

LOW, MEDIUM, HIGH = "low", "medium", "high"

IMMEDIATE   = "immediate"
SHORT_TERM  = "short-term"
MEDIUM_TERM = "medium-term"
LONG_TERM   = "long-term"

# --- State Bounds ---
# None means unbounded on that side.
BOUNDS: Dict[str, Tuple[Optional[float], Optional[float]]] = {
    "gdp_growth":       (-10.0, 15.0),
    "unemployment":     (0.5, 50.0),
    "literacy_rate":    (0.0, 100.0),
    "life_expectancy":  (45.0, 90.0),
    "poverty_rate":     (0.0, 90.0),
    "co2_emissions":    (0.0, None),
    "infant_mortality": (1.0, 150.0),
    "population":       (100_000.0, None),
}

# Policy categories used by the product-aware spillovers -> the lever they read.
CATEGORY_LEVERS: Dict[str, str] = {
    "agriculture":    AGRICULTURE,
    "manufacturing":  MANUFACTURING,
    "services":       SERVICES,
    "energy":         ENERGY,
    "technology":     TECHNOLOGY,
    "tourism":        TOURISM,
    "health":         HEALTH,
    "education":      EDUCATION,
    "infrastructure": CONNECTIVITY,
    "trade":          TRADE,
    "environment":    ENVIRONMENT,
    "cooperation":    TRUST,
}

# --- Product Tables ---
# All tables are ordered (keyword, value) pairs matched as lower-case
# substrings. Lookups that return a single value stop at the first match.

# keyword -> policy categories that make a product relevant
PRODUCT_RELEVANCE: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("textile",         ("manufacturing", "trade", "services")),
    ("garment",         ("manufacturing", "trade", "services")),
    ("apparel",         ("manufacturing", "trade", "services")),
    ("pharmaceuticals", ("health", "manufacturing", "technology")),
    ("machinery",       ("manufacturing", "technology", "infrastructure")),
    ("automobiles",     ("manufacturing", "technology", "infrastructure")),
    ("food",            ("agriculture", "trade")),
    ("rice",            ("agriculture", "trade")),
    ("tea",             ("agriculture", "trade")),
    ("cotton",          ("agriculture", "manufacturing")),
    ("petroleum",       ("energy", "trade", "environment")),
    ("hydroelectric",   ("energy", "infrastructure", "environment")),
    ("electricity",     ("energy", "infrastructure", "environment")),
    ("cement",          ("manufacturing", "infrastructure")),
    ("chemicals",       ("manufacturing", "health")),
    ("fish",            ("agriculture", "trade")),
    ("timber",          ("environment", "trade")),
    ("gems",            ("trade", "services")),
    ("handicrafts",     ("services", "tourism")),
    ("jute",            ("agriculture", "manufacturing", "trade")),
    ("leather",         ("manufacturing", "trade")),
    ("spices",          ("agriculture", "trade")),
    ("rubber",          ("agriculture", "manufacturing")),
    ("coconut",         ("agriculture", "trade")),
)

# keyword -> reported policy category (first match wins, default "trade")
PRODUCT_CATEGORY: Tuple[Tuple[str, str], ...] = (
    ("textiles",        "manufacturing"),
    ("pharmaceuticals", "health"),
    ("machinery",       "manufacturing"),
    ("food",            "agriculture"),
    ("rice",            "agriculture"),
    ("tea",             "agriculture"),
    ("cotton",          "agriculture"),
    ("petroleum",       "energy"),
    ("electricity",     "energy"),
    ("cement",          "manufacturing"),
    ("chemicals",       "manufacturing"),
    ("fish",            "agriculture"),
    ("timber",          "environment"),
    ("gems",            "services"),
    ("handicrafts",     "services"),
    ("jute",            "agriculture"),
    ("leather",         "manufacturing"),
    ("spices",          "agriculture"),
    ("rubber",          "agriculture"),
    ("coconut",         "agriculture"),
)

# keyword -> economic sector (first match wins, default "trade")
PRODUCT_SECTOR: Tuple[Tuple[str, str], ...] = (
    ("textiles",        "manufacturing"),
    ("pharmaceuticals", "health"),
    ("machinery",       "manufacturing"),
    ("food",            "agriculture"),
    ("petroleum",       "energy"),
    ("electricity",     "energy"),
    ("tea",             "agriculture"),
    ("rice",            "agriculture"),
    ("cotton",          "agriculture"),
    ("cement",          "manufacturing"),
    ("chemicals",       "manufacturing"),
    ("fish",            "agriculture"),
    ("timber",          "environment"),
    ("gems",            "mining"),
    ("handicrafts",     "services"),
)

# keyword -> effect type (default "trade")
PRODUCT_EFFECT_TYPE: Tuple[Tuple[str, str], ...] = (
    ("machinery",       "technology"),
    ("pharmaceuticals", "technology"),
    ("chemicals",       "technology"),
    ("electronics",     "technology"),
    ("petroleum",       "environment"),
    ("coal",            "environment"),
    ("natural gas",     "environment"),
    ("timber",          "environment"),
)

# keyword -> timeframe (default long-term)
PRODUCT_TIMEFRAME: Tuple[Tuple[str, str], ...] = (
    ("petroleum",       IMMEDIATE),
    ("electricity",     IMMEDIATE),
    ("food",            IMMEDIATE),
    ("gas",             IMMEDIATE),
    ("energy",          IMMEDIATE),
    ("textiles",        SHORT_TERM),
    ("machinery",       SHORT_TERM),
    ("cement",          SHORT_TERM),
    ("rice",            SHORT_TERM),
    ("fish",            SHORT_TERM),
    ("pharmaceuticals", MEDIUM_TERM),
    ("chemicals",       MEDIUM_TERM),
    ("equipment",       MEDIUM_TERM),
    ("technology",      LONG_TERM),
    ("education",       LONG_TERM),
    ("infrastructure",  LONG_TERM),
)

# Product magnitude groups: (group, keywords, levers whose deltas are summed).
# The coefficients live in SpilloverRates.product_coefficients.
PRODUCT_GROUPS: Tuple[Tuple[str, Tuple[str, ...], Tuple[str, ...]], ...] = (
    ("textiles",     ("textile", "cotton", "garment", "apparel"),               (MANUFACTURING, SERVICES)),
    ("pharma",       ("pharmaceutical", "chemical"),                            (HEALTH, MANUFACTURING)),
    ("machinery",    ("machinery", "equipment", "automobiles", "steel"),        (CONNECTIVITY, TECHNOLOGY)),
    ("agriculture",  ("food", "rice", "tea", "fish", "spice", "fruits", "vegetable"), (AGRICULTURE,)),
    ("energy",       ("petroleum", "hydroelectric", "electricity", "gas", "energy"),  (ENERGY,)),
    ("tourism",      ("handicraft", "tourism", "gem"),                          (TOURISM, SERVICES)),
    ("construction", ("cement", "construction"),                                (CONNECTIVITY,)),
)

# General (no product) spillovers
POLICY_EFFECT_TYPE: Dict[str, str] = {
    "trade": "trade", "tariff": "trade",
    "infrastructure": "investment", "foreign_investment": "investment",
    "technology": "technology",
    "environment": "environment",
}
POLICY_TIMEFRAME: Dict[str, str] = {
    "tariff": IMMEDIATE, "trade": IMMEDIATE,
    "infrastructure": MEDIUM_TERM, "health": MEDIUM_TERM,
    "education": LONG_TERM, "technology": LONG_TERM,
}

# --- Descriptions ---
# (keywords, positive template, negative template); placeholders {src}, {dst}, {product}
PRODUCT_DESCRIPTIONS: Tuple[Tuple[Tuple[str, ...], str, str], ...] = (
    (("textile", "garment", "apparel"),
     "{src}'s manufacturing policies boost its textile exports, affecting {dst}'s key garment industry.",
     "{src}'s manufacturing policies reduce its competitiveness, affecting {dst}'s key garment industry."),
    (("machinery", "automobiles", "motorcycles"),
     "A shift in {src}'s industrial strategy impacts its machinery trade, offering new technology to {dst}.",
     "A shift in {src}'s industrial strategy impacts its machinery trade, creating competition for {dst}."),
    (("petroleum", "energy", "hydroelectric"),
     "{src}'s energy policy changes affect cross-border power trade, influencing energy security in {dst}.",
     "{src}'s energy policy changes affect cross-border power trade, influencing energy security in {dst}."),
    (("food", "rice", "agriculture", "fish", "fruits", "vegetable"),
     "Agricultural policies in {src} influence food supply chains, impacting food prices and availability in {dst}.",
     "Agricultural policies in {src} influence food supply chains, impacting food prices and availability in {dst}."),
    (("pharmaceutical",),
     "Changes in {src}'s health and manufacturing sector affect the availability and cost of pharmaceuticals in {dst}.",
     "Changes in {src}'s health and manufacturing sector affect the availability and cost of pharmaceuticals in {dst}."),
)
PRODUCT_DESCRIPTION_DEFAULT = (
    "{src}'s policy on {product} positively impacts bilateral trade with {dst}.",
    "{src}'s policy on {product} negatively impacts bilateral trade with {dst}.",
)

CATEGORY_DESCRIPTIONS: Dict[str, Tuple[str, str]] = {
    "infrastructure": (
        "{src}'s investment in infrastructure improves cross-border connectivity, lowering trade costs for {dst}.",
        "{src}'s investment in infrastructure improves cross-border connectivity, creating bottlenecks for {dst}."),
    "trade": (
        "Greater trade openness in {src} increases market access for {dst}'s exporters.",
        "Greater trade openness in {src} intensifies competition for {dst}'s exporters."),
    "cooperation": (
        "A shift in {src}'s regional cooperation stance strengthens diplomatic and economic ties with {dst}.",
        "A shift in {src}'s regional cooperation stance weakens diplomatic and economic ties with {dst}."),
    "environment": (
        "{src}'s environmental regulations have cross-border effects on shared ecosystems and air quality in {dst}.",
        "{src}'s environmental regulations have cross-border effects on shared ecosystems and air quality in {dst}."),
    "technology": (
        "Investment in technology in {src} leads to knowledge spillovers, boosting innovation capacity in {dst}.",
        "Investment in technology in {src} leads to knowledge spillovers, widening the technology gap with {dst}."),
    "health": (
        "Public health policies in {src} can affect cross-border disease transmission and health security for {dst}.",
        "Public health policies in {src} can affect cross-border disease transmission and health security for {dst}."),
}
CATEGORY_DESCRIPTION_DEFAULT = "{src}'s {category} policy has a ripple effect on {dst}'s economy."

# --- Events ---
SUMMIT_EVENT   = "regional_cooperation_summit"
TENSIONS_EVENT = "border_tensions"
STABILITY_EVENT = "no_major_event"
