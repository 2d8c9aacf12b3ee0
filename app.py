# app.py
# SYNQ Data Observability ROI Calculator
# ---------------------------------------
# Purpose: Live, value-first ROI estimate for data teams. Every edit recomputes
# the results immediately; nothing is stored beyond the browser session.
# Notes:
# - One page serves all calculator variants (generic and gaming-branded). Pick one
#   from the menu or deep-link with ?variant=<key>.
# - Figures are marketing estimates built on fixed reduction assumptions.

import logging
import streamlit as st

from roi_calc import (
    CONTRACT_FIELD,
    DEFAULT_VARIANT,
    VARIANTS,
    FieldSpec,
    InputStore,
    Variant,
    currency,
    get_variant,
    percent,
    rate_label,
)

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

# -----------------------------
# Global UI Config
# -----------------------------
st.set_page_config(
    page_title="SYNQ — ROI Calculator",
    page_icon="🧮",
    layout="wide",
    initial_sidebar_state="collapsed",
)

# -----------------------------
# Styling (intro banner + result cards)
# -----------------------------
CARD_CSS = """
<style>
/***** Base tweaks *****/
.block-container {padding-top: 1.2rem;}

/***** Branded intro *****/
.intro-box {
  margin-bottom: 1rem;
  border: 1px solid #bbf7d0;
  border-radius: 14px;
  background: #f0fdf4;
  color: #166534;
  box-shadow: 0 2px 6px rgba(0,0,0,0.04);
}
.intro-inner {padding: 1rem 1.2rem;}
.intro-title {font-weight: 700; font-size: 1.1rem; margin-bottom: 0.35rem;}
.intro-body {font-size: 0.9rem; line-height: 1.4;}

/***** Result cards *****/
.card {
  border: 1px solid rgba(0,0,0,0.08);
  border-radius: 12px;
  background: #ffffff;
  padding: 1rem 1rem 0.75rem 1rem;
  margin-bottom: 0.75rem;
  box-shadow: 0 2px 8px rgba(0,0,0,0.04);
}
.card h4 {margin: 0 0 0.35rem 0; font-size: 1.05rem}
.kpi {font-weight: 800; font-size: 1.5rem; color: #6d28d9;}
.kpi.good {color: #0f766e;}
.kpi.bad {color: #b91c1c;}
.kpi-sub {color: #555; font-size: 0.9rem;}
.badge {display: inline-block; padding: 0.2rem 0.5rem; border-radius: 999px; font-size: 0.75rem;}
.badge.gray {background:#f2f2f2; color:#333; border: 1px solid #ddd}
</style>
"""

st.markdown(CARD_CSS, unsafe_allow_html=True)

GROUP_TITLES = {
    "team": "👥 Your Data Team",
    "impact": "📊 Business Impact",
    "contract": "💼 Investment",
}


# -----------------------------
# Session state helpers
# -----------------------------

def session_store(variant: Variant) -> InputStore:
    """Input store for one variant, kept in session state for the life of the tab."""
    backing = st.session_state.setdefault(f"inputs:{variant.key}", {})
    return InputStore(variant, backing)


def widget_key(variant: Variant, name: str) -> str:
    return f"{variant.key}:{name}"


def field_text(value: float) -> str:
    """Text shown in an entry box; zero shows as empty so the placeholder is visible."""
    if value == 0:
        return ""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def _on_field_change(variant_key: str, name: str) -> None:
    variant = VARIANTS[variant_key]
    session_store(variant).update(name, st.session_state[widget_key(variant, name)])


def _on_reset(variant_key: str) -> None:
    variant = VARIANTS[variant_key]
    session_store(variant).reset()
    for spec in variant.fields:
        st.session_state.pop(widget_key(variant, spec.name), None)


def _on_variant_change() -> None:
    key = st.session_state["variant"]
    logger.info("Calculator variant switched to %s", key)
    st.query_params["variant"] = key


# -----------------------------
# Controls
# -----------------------------

def input_field(store: InputStore, spec: FieldSpec) -> None:
    """Labelled numeric entry; bad or empty text silently counts as 0."""
    key = widget_key(store.variant, spec.name)
    if key not in st.session_state:
        st.session_state[key] = field_text(store[spec.name])
    st.text_input(
        spec.display_label,
        key=key,
        placeholder=spec.placeholder,
        help=spec.description or None,
        on_change=_on_field_change,
        args=(store.variant.key, spec.name),
    )


def contract_tier_selector(store: InputStore) -> None:
    variant = store.variant
    spec = variant.field_spec(CONTRACT_FIELD)
    key = widget_key(variant, CONTRACT_FIELD)
    if key not in st.session_state:
        st.session_state[key] = store.contract_cost
    st.selectbox(
        spec.label,
        options=list(variant.contract_tiers),
        format_func=lambda tier: "No contract" if tier == 0 else currency(tier),
        key=key,
        help=spec.description or None,
        on_change=_on_field_change,
        args=(variant.key, CONTRACT_FIELD),
    )


def result_card(title: str, value: str, sub: str, tone: str = "", badge: str = "") -> None:
    html = f"<div class='card'><h4>{title}</h4><div class='kpi {tone}'>{value}</div>"
    html += f"<div class='kpi-sub'>{sub}</div>"
    if badge:
        html += f"<span class='badge gray'>{badge}</span>"
    html += "</div>"
    st.markdown(html, unsafe_allow_html=True)


# -----------------------------
# Header
# -----------------------------
if "variant" not in st.session_state:
    st.session_state["variant"] = get_variant(st.query_params.get("variant", DEFAULT_VARIANT)).key

st.selectbox(
    "Calculator",
    options=list(VARIANTS),
    format_func=lambda key: VARIANTS[key].title,
    key="variant",
    on_change=_on_variant_change,
)
variant = VARIANTS[st.session_state["variant"]]
store = session_store(variant)

st.title(f"🧮 {variant.title}")
st.caption(variant.tagline)

if variant.intro:
    st.markdown(
        f"""
        <div class="intro-box"><div class="intro-inner">
        <div class="intro-title">How SYNQ Helps Supercell</div>
        <div class="intro-body">{variant.intro}</div>
        </div></div>
        """,
        unsafe_allow_html=True,
    )

# -----------------------------
# Inputs
# -----------------------------
left, right = st.columns([1.1, 1.2], gap="large")

with left:
    for group, group_title in GROUP_TITLES.items():
        specs = variant.group(group)
        if not specs:
            continue
        st.subheader(group_title)
        for spec in specs:
            if spec.name == CONTRACT_FIELD and variant.contract_tiers:
                contract_tier_selector(store)
            else:
                input_field(store, spec)

    st.button("Reset to defaults", on_click=_on_reset, args=(variant.key,))

# -----------------------------
# Results (recomputed on every rerun)
# -----------------------------
with right:
    st.subheader("Your Results")
    out = store.outputs()
    rate = rate_label(variant.reduction_rate)

    result_card("Monthly Cost", currency(out.total_monthly_cost), "Current monthly impact of data issues")
    result_card("Annual Cost", currency(out.annual_cost), "Current annual cost of poor data quality")
    result_card(
        f"Annual Savings ({rate})",
        currency(out.annual_savings),
        f"{currency(out.monthly_savings)}/mo with observability in place",
        tone="good",
    )
    if variant.has_productivity:
        result_card(
            "Productivity Gain",
            currency(out.productivity_gain),
            "Annual value of engineering time redirected to shipping features",
            tone="good",
        )
    net_tone = "good" if out.net_benefit >= 0 else "bad"
    result_card(
        variant.contract_label,
        currency(out.net_benefit),
        f"Savings minus {currency(store.contract_cost)} annual contract",
        tone=net_tone,
    )
    if variant.show_roi:
        result_card(
            "Return on Investment",
            percent(out.roi_percent),
            "Net benefit relative to contract cost",
            tone=net_tone,
            badge="0% when no contract is selected",
        )

    st.markdown("### Monthly cost breakdown")
    lines = [f"- **Team time on data issues**: {currency(out.monthly_team_cost)}"]
    for term in variant.incident_terms:
        lines.append(f"- **{term.label}**: {currency(out.incident_costs[term.output])}")
    st.markdown("\n".join(lines))

# -----------------------------
# Assumptions & formulas
# -----------------------------
st.divider()
st.subheader("Assumptions & formulas")

with st.expander("Show details", expanded=False):
    incident_lines = []
    for term in variant.incident_terms:
        if term.basis == "hours":
            incident_lines.append(f"- **{term.label}** (monthly): count × hours × (salary / 12 / 160)")
        else:
            incident_lines.append(f"- **{term.label}** (monthly): count × cost per event")
    productivity_line = ""
    if variant.has_productivity:
        productivity_line = (
            f"- **Productivity gain** (annual): team cost × 12 × {rate} × "
            f"{rate_label(variant.productivity_multiplier)} of recovered time redeployed to product work.\n"
        )
    roi_line = ""
    if variant.show_roi:
        roi_line = "- **ROI**: net benefit / contract cost × 100, shown as 0% when the contract cost is 0.\n"
    st.markdown(
        "- **Team cost** (monthly): headcount × salary × (% time / 100) / 12\n"
        + "\n".join(incident_lines)
        + "\n"
        + f"- **Savings**: total monthly cost × **{rate}** reduction, × 12 for the annual figure.\n"
        + productivity_line
        + f"- **{variant.contract_label}**: annual savings"
        + (" + productivity gain" if variant.has_productivity else "")
        + " − contract cost.\n"
        + roi_line
        + "\n**Limitations**: Rough estimate for a first conversation. Entries that are not numbers "
        "count as 0, and negative entries flow straight through the formulas."
    )

st.caption("© SYNQ — Estimates for discussion only. Not a quote.")
