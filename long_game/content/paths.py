"""The six narrative paths and the path-engine funding round catalog.

Tiers: orphan, blockbuster and first-in-class, each in a small-molecule
and a biologic variant.
"""

from __future__ import annotations

from long_game.domain.enums import PathModality, PathTier
from long_game.domain.funding import FundingRoundDef, ValueRange
from long_game.domain.path import GamePath, PathParameters, VictoryMetrics


# ── Funding Rounds ───────────────────────────────────────────────────────────

def _round(
    round_id: str,
    name: str,
    description: str,
    raise_range: tuple[float, float],
    dilution: tuple[float, float],
    expectation: str,
    multiple: str,
) -> FundingRoundDef:
    return FundingRoundDef(
        id=round_id,
        name=name,
        description=description,
        typical_raise=ValueRange(min=raise_range[0], max=raise_range[1]),
        dilution=ValueRange(min=dilution[0], max=dilution[1]),
        investor_expectation=expectation,
        target_multiple=multiple,
    )


FUNDING_ROUND_DEFS: dict[str, FundingRoundDef] = {
    r.id: r
    for r in (
        _round("seed", "Seed", "Early validation funding",
               (5, 15), (0.15, 0.25), "Prove target engaged", "10x"),
        _round("foundation", "Foundation Grant", "Non-dilutive funding from patient foundation",
               (3, 10), (0, 0), "Scientific promise", "N/A"),
        _round("seriesA", "Series A", "IND-enabling studies",
               (30, 60), (0.25, 0.35), "Clear IND path", "5-7x"),
        _round("seriesB", "Series B", "Clinical development",
               (60, 120), (0.20, 0.28), "Clinical proof-of-concept", "3-5x"),
        _round("seriesC", "Series C", "Pivotal trials",
               (100, 250), (0.15, 0.22), "Approval likely", "2-3x"),
        _round("crossover", "Crossover/Pre-IPO", "Pre-approval capital",
               (150, 300), (0.10, 0.15), "Near-term approval", "1.5-2x"),
        _round("partnership", "Partnership", "Strategic partner funding",
               (50, 200), (0, 0.10), "Strategic value", "Royalties"),
        _round("ipo", "IPO", "Public market financing",
               (150, 500), (0.12, 0.18), "Clear path to profitability", "1.5-2x"),
    )
}


# ── Paths ────────────────────────────────────────────────────────────────────

_ORPHAN_SM = GamePath(
    id="orphan-small-molecule",
    tier=PathTier.ORPHAN,
    modality=PathModality.SMALL_MOLECULE,
    name="Rare Neurological Disease",
    subtitle="Oral treatment for genetic muscle wasting disease",
    icon="pill",
    story=(
        "A genetic disease causes the body to lose the ability to make a critical protein "
        "for nerve cells. Babies with the most severe form rarely survive past age 2. A "
        "biologic injection already exists, but it requires painful spinal injections every "
        "4 months for life. Your company has discovered a small molecule that patients could "
        "take as a daily liquid or pill. Can you bring an easier treatment option to these families?"
    ),
    key_points=[
        "Competing against existing biologic (spinal injections)",
        "Oral delivery = major convenience advantage",
        "Orphan Drug Act: 7 years market exclusivity",
        "Tax credits cover 25% of clinical trial costs",
        "Priority Review pathway (6 months vs 12)",
        "IRA pill penalty: Only 9 years before Medicare negotiation",
    ],
    parameters=PathParameters(
        starting_capital=80,
        phase_ii_success_rate=0.40,
        phase_iii_cost_multiplier=0.65,
        market_potential=2000,
        patient_population=25000,
        timeline_years=ValueRange(min=12, max=17),
    ),
    funding_rounds=["seed", "seriesA", "seriesB", "seriesC", "crossover"],
    victory_metrics=VictoryMetrics(
        development_time=14.2,
        total_raised=343,
        founder_ownership=0.33,
        patient_impact=(
            "Patients who can now take a daily liquid instead of spinal injections every "
            "4 months: ~25,000 worldwide"
        ),
        social_contract="Year 1 price: $340,000/year. After exclusivity: Generic competition expected.",
    ),
)

_ORPHAN_BIO = GamePath(
    id="orphan-biologic",
    tier=PathTier.ORPHAN,
    modality=PathModality.BIOLOGIC,
    name="Spinal Muscular Atrophy",
    subtitle="First-ever treatment for fatal infant disease",
    icon="dna",
    story=(
        "Spinal muscular atrophy is the leading genetic cause of infant death. Babies born "
        "with the most severe form rarely survive past age 2. There is NO treatment. A "
        "patient foundation has spent 30 years funding research, and scientists have finally "
        "discovered a way to teach the body to make the missing protein. Your company has "
        "licensed this technology from a university. Can you bring the first-ever treatment "
        "to these families?"
    ),
    key_points=[
        "NO existing treatment - first-ever therapy",
        "Venture philanthropy model (foundation + biotech)",
        "Antisense oligonucleotide technology",
        "Intrathecal delivery (spinal injection)",
        "Complex manufacturing justifies high price",
        "12 years regulatory exclusivity for biologics",
    ],
    parameters=PathParameters(
        starting_capital=80,
        phase_ii_success_rate=0.40,
        phase_iii_cost_multiplier=0.70,
        market_potential=2000,
        patient_population=25000,
        timeline_years=ValueRange(min=15, max=21),
    ),
    funding_rounds=["foundation", "seriesA", "seriesB", "partnership", "ipo"],
    victory_metrics=VictoryMetrics(
        development_time=21,
        total_raised=400,
        founder_ownership=0.44,
        patient_impact=(
            "51% of treated infants achieved motor milestones vs. 0% untreated. Some "
            "children expected to die are now walking."
        ),
        social_contract=(
            "Price: $750,000 first year, $375,000/year ongoing. The alternative was no treatment."
        ),
    ),
)

_BLOCKBUSTER_SM = GamePath(
    id="blockbuster-small-molecule",
    tier=PathTier.BLOCKBUSTER,
    modality=PathModality.SMALL_MOLECULE,
    name="Cardiovascular Disease",
    subtitle="Cholesterol-lowering pill for millions",
    icon="heart",
    story=(
        "Heart disease is the #1 killer in the developed world. Scientists have proven that "
        "lowering \"bad\" cholesterol reduces heart attacks. Four competing drugs are already "
        "on the market. Your company has synthesized a new compound that appears more potent "
        "than anything available - but you would be the FIFTH drug to market. Management is "
        "debating: Kill the program, or bet the company that being best matters more than "
        "being first?"
    ),
    key_points=[
        "Entering established market (#5 to market)",
        "Clinical differentiation is essential",
        "Massive outcomes trials ($200-350M)",
        "50+ million patients in US alone",
        "Direct-to-consumer advertising enabled",
        "IRA pill penalty: Only 9 years before Medicare negotiation",
    ],
    parameters=PathParameters(
        starting_capital=150,
        phase_ii_success_rate=0.35,
        phase_iii_cost_multiplier=2.50,
        market_potential=8000,
        patient_population=50000000,
        timeline_years=ValueRange(min=12, max=18),
    ),
    funding_rounds=["seriesA", "seriesB", "seriesC", "partnership"],
    victory_metrics=VictoryMetrics(
        development_time=15,
        total_raised=850,
        founder_ownership=0.042,
        patient_impact=(
            "Tens of millions of patients. Heart attack risk reduced by 36%. Average LDL "
            "dropped from 150 to 70."
        ),
        social_contract=(
            "Branded: $5/day. After patent: Generic at $0.10/day - 94% reduction. Now on "
            "WHO Essential Medicines List."
        ),
    ),
)

_BLOCKBUSTER_BIO = GamePath(
    id="blockbuster-biologic",
    tier=PathTier.BLOCKBUSTER,
    modality=PathModality.BIOLOGIC,
    name="Cancer Immunotherapy",
    subtitle="Immune checkpoint inhibitor - worlds top-selling drug",
    icon="target",
    story=(
        "An academic scientist has discovered that cancer cells hide from the immune system "
        "by pressing a \"brake pedal\" on T-cells. Your company has created an antibody that "
        "releases this brake. But immunotherapy for cancer has failed for decades - investors "
        "are skeptical. A competitor just proved the concept works with a different target. "
        "Now it is a race. Can you reach patients before they do?"
    ),
    key_points=[
        "Racing against competitor with validated concept",
        "Platform potential: one drug, 40+ cancer types",
        "Durable responses - some patients effectively cured",
        "Autoimmune toxicity management required",
        "Breakthrough Therapy designation likely",
        "12 years exclusivity before biosimilar competition",
    ],
    parameters=PathParameters(
        starting_capital=150,
        phase_ii_success_rate=0.35,
        phase_iii_cost_multiplier=3.00,
        market_potential=8000,
        patient_population=1000000,
        timeline_years=ValueRange(min=12, max=18),
    ),
    funding_rounds=["seriesA", "seriesB", "seriesC", "ipo"],
    victory_metrics=VictoryMetrics(
        development_time=16,
        total_raised=880,
        founder_ownership=0.12,
        patient_impact=(
            "40+ indications. Peak sales: $29.5B/year. Some terminal patients now "
            "cancer-free for 10+ years."
        ),
        social_contract=(
            "Price: $150,000+/year. Value: Lives extended by years, not months. Some "
            "effectively CURED."
        ),
    ),
)

_FIRSTINCLASS_SM = GamePath(
    id="firstinclass-small-molecule",
    tier=PathTier.FIRST_IN_CLASS,
    modality=PathModality.SMALL_MOLECULE,
    name="Blood Cancer - Targeted Therapy",
    subtitle="First \"magic bullet\" - proving cancer can be targeted",
    icon="flask",
    story=(
        "For 30 years, scientists have known that a genetic accident - two chromosomes "
        "swapping pieces - causes a deadly blood cancer. This creates a mutant enzyme that "
        "tells cells to multiply uncontrollably. Your company has designed a small molecule "
        "to block ONLY this mutant enzyme, leaving normal cells alone. No one has ever "
        "successfully targeted cancer this precisely. If it works, it could change "
        "everything. If it fails, you will have wasted a decade."
    ),
    key_points=[
        "First-ever molecularly targeted cancer therapy",
        "100% response rate in Phase I (unprecedented)",
        "Resistance mutations emerge over time",
        "Paradigm shift: precision medicine born",
        "WHO Essential Medicines List after patent expires",
        "IRA pill penalty: Only 9 years before Medicare negotiation",
    ],
    parameters=PathParameters(
        starting_capital=100,
        phase_ii_success_rate=0.25,
        phase_iii_cost_multiplier=1.50,
        market_potential=6000,
        patient_population=30000,
        timeline_years=ValueRange(min=15, max=20),
    ),
    funding_rounds=["seed", "seriesA", "seriesB", "seriesC", "ipo"],
    victory_metrics=VictoryMetrics(
        development_time=32,
        total_raised=530,
        founder_ownership=0.31,
        patient_impact=(
            "5-year survival: 89% (was 30%). Most patients take a pill daily, live normal lives."
        ),
        social_contract=(
            "Year 1: $26K/year. Year 20: Generic <$1K/year globally. Now WHO Essential Medicine."
        ),
    ),
)

_FIRSTINCLASS_BIO = GamePath(
    id="firstinclass-biologic",
    tier=PathTier.FIRST_IN_CLASS,
    modality=PathModality.BIOLOGIC,
    name="First Checkpoint Inhibitor",
    subtitle="Proving immunotherapy can work in cancer",
    icon="microscope",
    story=(
        "For a century, scientists have dreamed of harnessing the immune system to fight "
        "cancer. Every attempt has failed. An academic researcher has discovered that cancer "
        "cells press a \"brake pedal\" on immune cells to hide from attack. Your company has "
        "created an antibody to release this brake. The scientific establishment is "
        "skeptical - immunotherapy has a long history of failure. If you are wrong, you will "
        "waste years and hundreds of millions. If you are right, you could change everything."
    ),
    key_points=[
        "Proving a concept with 100 years of failure",
        "First checkpoint inhibitor ever",
        "Enables entire follow-on drug class",
        "Significant autoimmune toxicity (20%)",
        "Nobel Prize science",
        "12 years exclusivity before biosimilar competition",
    ],
    parameters=PathParameters(
        starting_capital=100,
        phase_ii_success_rate=0.25,
        phase_iii_cost_multiplier=2.00,
        market_potential=6000,
        patient_population=50000,
        timeline_years=ValueRange(min=18, max=25),
    ),
    funding_rounds=["seed", "seriesA", "seriesB", "seriesC"],
    victory_metrics=VictoryMetrics(
        development_time=25,
        total_raised=365,
        founder_ownership=0.18,
        patient_impact=(
            "First-ever survival improvement in metastatic melanoma. 20% long-term survival. "
            "Enabled 8+ checkpoint drugs."
        ),
        social_contract=(
            "You proved the concept. Follow-on drugs may be better, but without yours, none "
            "would exist."
        ),
    ),
)

GAME_PATHS: dict[str, GamePath] = {
    p.id: p
    for p in (
        _ORPHAN_SM,
        _ORPHAN_BIO,
        _BLOCKBUSTER_SM,
        _BLOCKBUSTER_BIO,
        _FIRSTINCLASS_SM,
        _FIRSTINCLASS_BIO,
    )
}


def get_path(path_id: str) -> GamePath | None:
    return GAME_PATHS.get(path_id)
