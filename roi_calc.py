# roi_calc.py
# SYNQ ROI Calculator: calculation core
# --------------------------------------
# Purpose: Field definitions, input store and derivation formulas shared by all
# calculator variants. Nothing in here touches Streamlit.
# Notes:
# - Reduction rates and the productivity multiplier are marketing assumptions,
#   not measured results.
# - Bad input never raises: it becomes 0 and the arithmetic carries on.

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Mapping, MutableMapping, Optional, Tuple

logger = logging.getLogger(__name__)

# -----------------------------
# Constants
# -----------------------------
MONTHS_PER_YEAR = 12
HOURS_PER_MONTH = 160  # working hours used to turn a salary into an hourly rate

GENERIC_REDUCTION = 0.50
GAMING_REDUCTION = 0.65
PRODUCTIVITY_MULTIPLIER = 0.25  # value of redeployed engineering time, gaming variants only

STARTER_TIERS = (0.0, 15_000.0, 30_000.0, 60_000.0)
STUDIO_TIERS = (15_000.0, 30_000.0, 60_000.0, 120_000.0)

CONTRACT_FIELD = "contract_cost"

SUPERCELL_INTRO = (
    "Supercell relies heavily on accurate in-game analytics, live ops metrics, and player "
    "segmentation. SYNQ helps game studios reduce downtime in dashboards, improve the accuracy "
    "of player-facing features, and automate incident resolution, freeing up engineers to "
    "focus on what matters."
)


# -----------------------------
# Declarative building blocks
# -----------------------------
@dataclass(frozen=True)
class FieldSpec:
    name: str
    label: str
    group: str  # "team", "impact" or "contract"
    default: float = 0.0
    example: str = ""
    prefix: str = ""
    suffix: str = ""
    description: str = ""
    hint: str = ""  # verbatim placeholder, replaces the "e.g." example

    @property
    def unit(self) -> str:
        return self.prefix or self.suffix

    @property
    def display_label(self) -> str:
        if self.unit and self.unit not in self.label:
            return f"{self.label} ({self.unit})"
        return self.label

    @property
    def placeholder(self) -> str:
        if self.hint:
            return self.hint
        if not self.example:
            return ""
        return f"e.g. {self.prefix}{self.example}{self.suffix}"


@dataclass(frozen=True)
class IncidentTerm:
    """One recurring-failure cost line.

    basis="hours": count * hours per event * hourly rate derived from salary.
    basis="cost":  count * cost per event.
    """

    output: str
    label: str
    count_field: str
    amount_field: str
    basis: str = "cost"

    def monthly_cost(self, inputs: Mapping[str, float], hourly_rate: float) -> float:
        count = inputs.get(self.count_field, 0.0)
        amount = inputs.get(self.amount_field, 0.0)
        if self.basis == "hours":
            return count * amount * hourly_rate
        return count * amount


@dataclass(frozen=True)
class Variant:
    key: str
    title: str
    tagline: str
    fields: Tuple[FieldSpec, ...]
    incident_terms: Tuple[IncidentTerm, ...]
    reduction_rate: float
    contract_label: str
    contract_tiers: Optional[Tuple[float, ...]] = None
    productivity_multiplier: float = 0.0
    show_roi: bool = False
    intro: str = ""
    headcount_field: str = "team_size"
    share_field: str = "time_on_data_quality"
    salary_field: str = "average_salary"

    @property
    def has_productivity(self) -> bool:
        return self.productivity_multiplier > 0

    def field_spec(self, name: str) -> FieldSpec:
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(name)

    def group(self, group: str) -> Tuple[FieldSpec, ...]:
        return tuple(spec for spec in self.fields if spec.group == group)

    def defaults(self) -> Dict[str, float]:
        return {spec.name: float(spec.default) for spec in self.fields}


# -----------------------------
# Helper functions
# -----------------------------

def coerce_number(raw) -> float:
    """Parse a user entry as a number; anything unusable becomes 0.0."""
    if raw is None or isinstance(raw, bool):
        return 0.0
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        text = str(raw).strip()
        if not text:
            return 0.0
        # float() accepts digit separators and Unicode digits, browsers do not
        if "_" in text or not text.isascii():
            logger.debug("Non-numeric entry %r treated as 0", raw)
            return 0.0
        try:
            value = float(text)
        except (TypeError, ValueError):
            logger.debug("Non-numeric entry %r treated as 0", raw)
            return 0.0
    if not math.isfinite(value):
        logger.debug("Non-finite entry %r treated as 0", raw)
        return 0.0
    return value


def select_tier(tiers: Tuple[float, ...], value: float) -> float:
    """Restrict a contract cost to the enumerated tiers (first tier if unknown)."""
    value = coerce_number(value)
    if value in tiers:
        return value
    return tiers[0]


def currency(x: float) -> str:
    if not math.isfinite(x):
        return "n/a"
    sign = "-" if x < 0 and round(x) != 0 else ""
    return f"{sign}${abs(x):,.0f}"


def percent(x: float) -> str:
    if not math.isfinite(x):
        return "n/a"
    if round(x) == 0:
        return "0%"
    return f"{x:,.0f}%"


def rate_label(rate: float) -> str:
    return f"{rate*100:.0f}%"


# -----------------------------
# Derivation
# -----------------------------
@dataclass(frozen=True)
class DerivedOutputs:
    monthly_team_cost: float
    incident_costs: Dict[str, float] = field(default_factory=dict)
    total_monthly_cost: float = 0.0
    annual_cost: float = 0.0
    monthly_savings: float = 0.0
    annual_savings: float = 0.0
    productivity_gain: float = 0.0
    net_benefit: float = 0.0
    roi_percent: float = 0.0

    def cost_terms(self) -> Dict[str, float]:
        terms = {"monthly_team_cost": self.monthly_team_cost}
        terms.update(self.incident_costs)
        return terms

    def as_dict(self) -> Dict[str, float]:
        out = self.cost_terms()
        out.update(
            total_monthly_cost=self.total_monthly_cost,
            annual_cost=self.annual_cost,
            monthly_savings=self.monthly_savings,
            annual_savings=self.annual_savings,
            productivity_gain=self.productivity_gain,
            net_benefit=self.net_benefit,
            roi_percent=self.roi_percent,
        )
        return out


def derive(variant: Variant, inputs: Mapping[str, float], contract_cost: float) -> DerivedOutputs:
    """Compute every derived figure from the current inputs.

    Pure and total: missing fields read as 0, nothing is rounded, nothing raises.
    """
    headcount = inputs.get(variant.headcount_field, 0.0)
    share = inputs.get(variant.share_field, 0.0)
    salary = inputs.get(variant.salary_field, 0.0)
    hourly_rate = salary / MONTHS_PER_YEAR / HOURS_PER_MONTH

    monthly_team_cost = headcount * salary * (share / 100) / MONTHS_PER_YEAR
    incident_costs = {
        term.output: term.monthly_cost(inputs, hourly_rate) for term in variant.incident_terms
    }

    total_monthly_cost = monthly_team_cost + sum(incident_costs.values())
    annual_cost = total_monthly_cost * MONTHS_PER_YEAR
    monthly_savings = total_monthly_cost * variant.reduction_rate
    annual_savings = monthly_savings * MONTHS_PER_YEAR
    productivity_gain = (
        monthly_team_cost * MONTHS_PER_YEAR * variant.reduction_rate * variant.productivity_multiplier
    )
    net_benefit = annual_savings + productivity_gain - contract_cost
    roi_percent = (net_benefit / contract_cost) * 100 if contract_cost > 0 else 0.0

    logger.debug("Recomputed %s: total_monthly_cost=%.2f", variant.key, total_monthly_cost)
    return DerivedOutputs(
        monthly_team_cost=monthly_team_cost,
        incident_costs=incident_costs,
        total_monthly_cost=total_monthly_cost,
        annual_cost=annual_cost,
        monthly_savings=monthly_savings,
        annual_savings=annual_savings,
        productivity_gain=productivity_gain,
        net_benefit=net_benefit,
        roi_percent=roi_percent,
    )


# -----------------------------
# Input store
# -----------------------------
class InputStore:
    """Current numeric value of every field of one variant.

    `backing` lets the page keep the record in Streamlit session state; a plain
    dict is used otherwise. Missing entries are seeded from the field defaults.
    """

    def __init__(self, variant: Variant, backing: Optional[MutableMapping[str, float]] = None):
        self.variant = variant
        self._values = backing if backing is not None else {}
        for name, default in variant.defaults().items():
            self._values.setdefault(name, default)

    def __getitem__(self, name: str) -> float:
        return self._values[name]

    def update(self, name: str, raw) -> float:
        if name not in self._values:
            raise KeyError(name)
        value = coerce_number(raw)
        if name == CONTRACT_FIELD and self.variant.contract_tiers:
            value = select_tier(self.variant.contract_tiers, value)
        self._values[name] = value
        return value

    @property
    def contract_cost(self) -> float:
        return self._values.get(CONTRACT_FIELD, 0.0)

    def values(self) -> Dict[str, float]:
        return dict(self._values)

    def reset(self) -> None:
        logger.info("Resetting %s inputs to defaults", self.variant.key)
        self._values.clear()
        self._values.update(self.variant.defaults())

    def outputs(self) -> DerivedOutputs:
        return derive(self.variant, self._values, self.contract_cost)


# -----------------------------
# Variants
# -----------------------------
_TEAM_SIZE = FieldSpec("team_size", "Team size", "team", example="5")
_SALARY = FieldSpec(
    "average_salary", "Average salary", "team", default=100_000, example="100000", prefix="$",
    description="Fully-loaded annual cost per team member.",
)

DATA_OBSERVABILITY = Variant(
    key="data-observability",
    title="Data Observability ROI Calculator",
    tagline="Built for data teams delivering business-critical impact.",
    fields=(
        _TEAM_SIZE,
        FieldSpec("time_on_data_quality", "% time on data quality", "team", example="30", suffix="%"),
        _SALARY,
        FieldSpec("failed_dashboards", "Failed dashboards/mo", "impact", example="5"),
        FieldSpec("downtime_hours", "Downtime per dashboard (hrs)", "impact", example="2"),
        FieldSpec("bad_decisions", "Bad decisions/mo", "impact", example="2"),
        FieldSpec("cost_per_decision", "Cost per bad decision", "impact", example="10000", prefix="$"),
        FieldSpec(
            CONTRACT_FIELD, "SYNQ contract cost (annual)", "contract", prefix="$",
            hint="15000, 30000, or 60000",
        ),
    ),
    incident_terms=(
        IncidentTerm("monthly_dashboard_cost", "Dashboard downtime", "failed_dashboards",
                     "downtime_hours", basis="hours"),
        IncidentTerm("monthly_bad_decision_cost", "Bad decisions", "bad_decisions",
                     "cost_per_decision"),
    ),
    reduction_rate=GENERIC_REDUCTION,
    contract_label="Net Benefit After SYNQ",
)

_GAMING_FIELDS = (
    FieldSpec("team_size", "Data & analytics engineers", "team", default=12, example="12"),
    FieldSpec(
        "time_on_data_quality", "% time firefighting data issues", "team", default=35,
        example="35", suffix="%",
        description="Share of the week spent chasing broken pipelines and metrics.",
    ),
    FieldSpec(
        "average_salary", "Average salary", "team", default=110_000, example="110000", prefix="$",
        description="Fully-loaded annual cost per engineer.",
    ),
    FieldSpec("failed_dashboards", "Broken live ops dashboards/mo", "impact", default=8, example="8"),
    FieldSpec("downtime_hours", "Hours to restore each dashboard", "impact", default=3, example="3"),
    FieldSpec(
        "player_incidents", "Player-facing data incidents/mo", "impact", default=3, example="3",
        description="Wrong offers, broken segments, mis-tuned live events.",
    ),
    FieldSpec("cost_per_incident", "Cost per player-facing incident", "impact", default=25_000,
              example="25000", prefix="$"),
)

_GAMING_TERMS = (
    IncidentTerm("monthly_dashboard_cost", "Live ops dashboard downtime", "failed_dashboards",
                 "downtime_hours", basis="hours"),
    IncidentTerm("monthly_player_incident_cost", "Player-facing incidents", "player_incidents",
                 "cost_per_incident"),
)

SUPERCELL = Variant(
    key="supercell",
    title="SYNQ for Supercell: Live Ops Savings",
    tagline="Live ops analytics you can trust, every day of the season.",
    intro=SUPERCELL_INTRO,
    fields=_GAMING_FIELDS + (
        FieldSpec(CONTRACT_FIELD, "SYNQ contract tier (annual)", "contract", default=30_000, prefix="$"),
    ),
    incident_terms=_GAMING_TERMS,
    reduction_rate=GAMING_REDUCTION,
    contract_tiers=STARTER_TIERS,
    productivity_multiplier=PRODUCTIVITY_MULTIPLIER,
    contract_label="Net Benefit After SYNQ",
)

SUPERCELL_ROI = Variant(
    key="supercell-roi",
    title="SYNQ × Supercell ROI",
    tagline="What reliable game data is worth to a studio at Supercell's scale.",
    intro=SUPERCELL_INTRO,
    fields=_GAMING_FIELDS + (
        FieldSpec(CONTRACT_FIELD, "SYNQ contract tier (annual)", "contract", default=60_000, prefix="$"),
    ),
    incident_terms=_GAMING_TERMS,
    reduction_rate=GAMING_REDUCTION,
    contract_tiers=STUDIO_TIERS,
    productivity_multiplier=PRODUCTIVITY_MULTIPLIER,
    show_roi=True,
    contract_label="Net Annual Benefit",
)

VARIANTS: Dict[str, Variant] = {v.key: v for v in (DATA_OBSERVABILITY, SUPERCELL, SUPERCELL_ROI)}
DEFAULT_VARIANT = DATA_OBSERVABILITY.key


def get_variant(key: Optional[str]) -> Variant:
    return VARIANTS.get(key or DEFAULT_VARIANT, VARIANTS[DEFAULT_VARIANT])
