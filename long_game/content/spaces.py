"""The 24 ordered board spaces, from target identification to the generic clock.

Costs are in $M and follow published industry ranges for each stage.
"""

from __future__ import annotations

from long_game.domain.board import Space, SpaceTooltip, SpecialEffect
from long_game.domain.enums import GamePhase, SpecialEffectType
from long_game.domain.tokens import DataTokens, TokenDelta

SPACES: list[Space] = [
    # ── Discovery (1-6) ──────────────────────────────────────────────────
    Space(
        id=1,
        name="Target Identification & Validation",
        phase=GamePhase.DISCOVERY,
        cost=3,
        success_rate=0.6,
        data_yield=TokenDelta(efficacy=1),
        risk_card_chance=0.3,
        tooltip=SpaceTooltip(
            quick="Identify and validate a disease target",
            detailed="Use genetics, biochemistry, and cell models to confirm this protein/pathway "
                     "is druggable and disease-relevant. ~40% of targets fail validation.",
            cost_breakdown="$3M covers target selection, assay development, and genetic validation",
        ),
    ),
    Space(
        id=2,
        name="Assay Development",
        phase=GamePhase.DISCOVERY,
        cost=2,
        success_rate=0.75,
        data_yield=TokenDelta(efficacy=1),
        tooltip=SpaceTooltip(
            quick="Build screening tools to find drug candidates",
            detailed="Develop biochemical and cellular assays to measure compound activity. Often "
                     "bundled with screening; costs vary by assay complexity.",
            cost_breakdown="$2M for assay design, validation, and automation",
        ),
    ),
    Space(
        id=3,
        name="High-Throughput Screen",
        phase=GamePhase.DISCOVERY,
        cost=3,
        success_rate=0.70,
        data_yield=TokenDelta(efficacy=2),
        special_effect=SpecialEffect(type=SpecialEffectType.CHOICE_REQUIRED),
        tooltip=SpaceTooltip(
            quick="Screen millions of compounds for activity",
            detailed="You screen 1,000,000+ compounds and find ~500 initial hits. Costs depend on "
                     "library size; may hit millions of compounds.",
            cost_breakdown="$3M for compound libraries, screening operations, and hit analysis",
        ),
    ),
    Space(
        id=4,
        name="Hit Validation",
        phase=GamePhase.DISCOVERY,
        cost=2,
        success_rate=0.75,
        data_yield=TokenDelta(efficacy=1, pkpd=1),
        risk_card_chance=0.4,
        tooltip=SpaceTooltip(
            quick="Confirm hits are real and not artifacts",
            detailed="Of ~500 hits, only ~50 confirm as real activity. Confirmation of hits "
                     "eliminates false positives (PAINS compounds, assay interference).",
            cost_breakdown="$2M for confirmatory studies and early ADME profiling",
        ),
    ),
    Space(
        id=5,
        name="Lead Optimization",
        phase=GamePhase.DISCOVERY,
        cost=8,
        success_rate=0.70,
        data_yield=TokenDelta(pkpd=1),
        special_effect=SpecialEffect(
            type=SpecialEffectType.CAN_UPGRADE, cost=5, bonus=TokenDelta(pkpd=1),
        ),
        tooltip=SpaceTooltip(
            quick="Improve drug properties through chemistry",
            detailed="From ~50 validated hits, medicinal chemists synthesize 500-2000 analogs over "
                     "12-18 months to identify 1-3 clinical candidates.",
            cost_breakdown="$8M for iterative synthesis and testing cycles (typical range: $5-15M)",
        ),
    ),
    Space(
        id=6,
        name="Candidate Selection",
        phase=GamePhase.DISCOVERY,
        cost=2,
        is_gate=True,
        success_rate=0.85,
        gate_requirement=DataTokens(efficacy=3, safety=0, pkpd=1, cmc=0),
        data_yield=TokenDelta(safety=1, pkpd=1),
        tooltip=SpaceTooltip(
            quick="From 1-3 candidates, choose your lead for preclinical",
            detailed="After developing hundreds of variants in lead optimization, you narrowed to "
                     "1-3 candidates. Now select your primary candidate (with backups) for "
                     "IND-enabling studies.",
            cost_breakdown="$2M for final profiling, head-to-head comparisons, and candidate documentation",
        ),
    ),
    # ── Preclinical (7-11) ───────────────────────────────────────────────
    Space(
        id=7,
        name="Exploratory Toxicology",
        phase=GamePhase.PRECLINICAL,
        cost=2,
        success_rate=0.80,
        data_yield=TokenDelta(safety=1),
        risk_card_chance=0.3,
        tooltip=SpaceTooltip(
            quick="Early safety studies in animals (non-GLP)",
            detailed="Dose-range finding toxicology to identify potential safety issues. Non-GLP "
                     "studies to guide GLP design.",
            cost_breakdown="$2M for rodent and non-rodent exploratory studies",
        ),
    ),
    Space(
        id=8,
        name="PK/ADME Studies",
        phase=GamePhase.PRECLINICAL,
        cost=3,
        success_rate=0.70,
        data_yield=TokenDelta(pkpd=2),
        special_effect=SpecialEffect(type=SpecialEffectType.RETURN_TO_SPACE, space_id=5),
        tooltip=SpaceTooltip(
            quick="Characterize how the drug behaves in the body",
            detailed="Study Absorption, Distribution, Metabolism, and Excretion. Poor PK is a major "
                     "cause of clinical failure (~85% success rate).",
            cost_breakdown="$3M for in vivo PK, metabolite ID, and DDI studies",
        ),
    ),
    Space(
        id=9,
        name="GLP Toxicology Package",
        phase=GamePhase.PRECLINICAL,
        cost=5,
        success_rate=0.85,
        data_yield=TokenDelta(safety=2),
        tooltip=SpaceTooltip(
            quick="IND-enabling safety studies (28-day, 2 species)",
            detailed="Good Laboratory Practice toxicology required by FDA before human testing. "
                     "Required for IND; 28-day studies in 2 species typical.",
            cost_breakdown="$5M for 28-day studies in two species, genotoxicity, safety pharmacology",
        ),
    ),
    Space(
        id=10,
        name="CMC Scale-up & Formulation",
        phase=GamePhase.PRECLINICAL,
        cost=4,
        success_rate=0.90,
        data_yield=TokenDelta(cmc=3),
        special_effect=SpecialEffect(
            type=SpecialEffectType.CAN_UPGRADE, cost=2, bonus=TokenDelta(cmc=1),
        ),
        tooltip=SpaceTooltip(
            quick="Develop manufacturing process (cGMP)",
            detailed="Chemistry, Manufacturing, and Controls: develop a reproducible process. cGMP "
                     "manufacturing ~50% of non-clinical budget.",
            cost_breakdown="$4M for process development, formulation, analytical methods",
        ),
    ),
    Space(
        id=11,
        name="IND Filing",
        phase=GamePhase.PRECLINICAL,
        cost=2,
        is_gate=True,
        success_rate=0.95,
        gate_requirement=DataTokens(efficacy=2, safety=2, pkpd=1, cmc=1),
        data_yield=TokenDelta(safety=1),
        policy_card_chance=0.5,
        tooltip=SpaceTooltip(
            quick="Submit Investigational New Drug application",
            detailed="Document preparation; FDA PDUFA fees ~$2-3M additional. Package all "
                     "preclinical data for FDA review.",
            cost_breakdown="$2M for regulatory preparation and filing fees",
        ),
    ),
    # ── Clinical (12-18) ─────────────────────────────────────────────────
    Space(
        id=12,
        name="Phase I - Single Ascending Dose",
        phase=GamePhase.CLINICAL,
        cost=5,
        success_rate=0.65,
        data_yield=TokenDelta(safety=2, pkpd=1),
        risk_card_chance=0.2,
        tooltip=SpaceTooltip(
            quick="First-in-human: 20-80 healthy volunteers",
            detailed="Single ascending dose study. Primary goal: safety and tolerability. Combined "
                     "Phase I success ~47-54%.",
            cost_breakdown="$5M for site setup, volunteer recruitment, monitoring",
        ),
    ),
    Space(
        id=13,
        name="Phase I - Multiple Ascending Dose",
        phase=GamePhase.CLINICAL,
        cost=5,
        success_rate=0.54,
        data_yield=TokenDelta(safety=1, pkpd=2),
        risk_card_chance=0.15,
        tooltip=SpaceTooltip(
            quick="Repeat dosing to understand PK",
            detailed="Multiple ascending dose for steady-state PK and cumulative toxicity. "
                     "Combined Phase I success ~47-54%.",
            cost_breakdown="$5M for extended monitoring and PK sampling",
        ),
    ),
    Space(
        id=14,
        name="Phase IIa - Proof of Concept",
        phase=GamePhase.CLINICAL,
        cost=15,
        success_rate=0.35,
        data_yield=TokenDelta(efficacy=3),
        policy_card_chance=0.3,
        tooltip=SpaceTooltip(
            quick="First efficacy signal in 100-300 patients",
            detailed="Does the drug work in patients? This is the \"valley of death\": only ~35% "
                     "of candidates show meaningful efficacy here.",
            cost_breakdown="$15M for patient sites, enrollment, and efficacy endpoints",
        ),
    ),
    Space(
        id=15,
        name="Phase IIb - Dose Finding",
        phase=GamePhase.CLINICAL,
        cost=25,
        success_rate=0.28,
        data_yield=TokenDelta(efficacy=2, safety=1, pkpd=1),
        is_gate=True,
        gate_requirement=DataTokens(efficacy=5, safety=4, pkpd=3, cmc=2),
        tooltip=SpaceTooltip(
            quick="Larger efficacy study; dose optimization",
            detailed="Larger study testing multiple doses (dose-response). Phase II overall is "
                     "~28-35% successful.",
            cost_breakdown="$25M for multi-arm dose-response study",
        ),
    ),
    Space(
        id=16,
        name="Phase III - Pivotal Study 1",
        phase=GamePhase.CLINICAL,
        cost=50,
        success_rate=0.58,
        data_yield=TokenDelta(efficacy=3, safety=2),
        policy_card_chance=0.4,
        tooltip=SpaceTooltip(
            quick="Large confirmatory trial (300-3000+ patients)",
            detailed="First registration-enabling trial. Large, randomized, controlled. Highly "
                     "variable costs; oncology can exceed $100M.",
            cost_breakdown="$50M for hundreds of patients across multiple sites globally",
        ),
    ),
    Space(
        id=17,
        name="Phase III - Pivotal Study 2",
        phase=GamePhase.CLINICAL,
        cost=50,
        success_rate=0.58,
        data_yield=TokenDelta(efficacy=3, safety=2, cmc=1),
        tooltip=SpaceTooltip(
            quick="Second pivotal (often required)",
            detailed="FDA typically requires two adequate and well-controlled trials for approval. "
                     "Second pivotal often required.",
            cost_breakdown="$50M for second confirmatory study",
        ),
    ),
    Space(
        id=18,
        name="Long-term Safety Extension",
        phase=GamePhase.CLINICAL,
        cost=35,
        success_rate=0.90,
        data_yield=TokenDelta(safety=2),
        tooltip=SpaceTooltip(
            quick="Post-pivotal safety monitoring (Phase IV-like)",
            detailed="Monitor patients for longer-term safety signals. ~90% success rate; supports "
                     "the drug label.",
            cost_breakdown="$35M for ongoing monitoring and data collection",
        ),
    ),
    # ── Regulatory (19-24) ───────────────────────────────────────────────
    Space(
        id=19,
        name="NDA/BLA Submission",
        phase=GamePhase.REGULATORY,
        cost=3,
        is_gate=True,
        success_rate=0.92,
        gate_requirement=DataTokens(efficacy=8, safety=6, pkpd=4, cmc=3),
        policy_card_chance=0.6,
        tooltip=SpaceTooltip(
            quick="Document preparation; PDUFA fees ~$4M",
            detailed="New Drug Application (NDA) or Biologics License Application (BLA) with "
                     "complete data package.",
            cost_breakdown="$3M for submission preparation (PDUFA fees separate)",
        ),
    ),
    Space(
        id=20,
        name="FDA Review Clock",
        phase=GamePhase.REGULATORY,
        cost=0,
        special_effect=SpecialEffect(type=SpecialEffectType.WAIT_TURNS, turns=2),
        policy_card_chance=0.5,
        tooltip=SpaceTooltip(
            quick="10-12 months standard; 6 mo priority review",
            detailed="Standard review takes 10-12 months. Priority Review can be 6 months. No "
                     "direct cost, but opportunity cost.",
            cost_breakdown="No direct cost, but opportunity cost of waiting",
        ),
    ),
    Space(
        id=21,
        name="Advisory Committee",
        phase=GamePhase.REGULATORY,
        cost=2,
        success_rate=0.75,
        tooltip=SpaceTooltip(
            quick="Panel meeting preparation (not always required)",
            detailed="FDA may convene external experts (AdCom) to review data. Their vote "
                     "influences approval. 75% success rate typical.",
            cost_breakdown="$2M for preparation and expert consultants",
        ),
    ),
    Space(
        id=22,
        name="Label Negotiation",
        phase=GamePhase.REGULATORY,
        cost=1,
        success_rate=0.95,
        special_effect=SpecialEffect(type=SpecialEffectType.CHOICE_REQUIRED),
        tooltip=SpaceTooltip(
            quick="Minimal cost; part of review process",
            detailed="The label determines what claims you can make and which patients can be "
                     "treated. Label scope affects market size.",
            cost_breakdown="$1M for label negotiations and final documentation",
        ),
    ),
    Space(
        id=23,
        name="FDA Approval",
        phase=GamePhase.REGULATORY,
        cost=0,
        success_rate=0.91,
        is_gate=True,
        gate_requirement=DataTokens(efficacy=8, safety=6, pkpd=4, cmc=4),
        special_effect=SpecialEffect(type=SpecialEffectType.VICTORY_CHECK),
        tooltip=SpaceTooltip(
            quick="Success rate from NDA to approval: ~90-92%",
            detailed="If you meet all requirements, FDA approves your drug for marketing. "
                     "Historical success rate: 90-92%.",
            cost_breakdown="Victory! But remember: the real work of treating patients just begins",
        ),
    ),
    Space(
        id=24,
        name="Generic Clock Starts",
        phase=GamePhase.REGULATORY,
        cost=0,
        special_effect=SpecialEffect(type=SpecialEffectType.GENERIC_CLOCK),
        tooltip=SpaceTooltip(
            quick="Marketing exclusivity begins",
            detailed="Medicare price negotiation begins after 9 years (small molecules) or 13 years "
                     "(biologics) under the IRA. Your exclusivity period funds the next generation "
                     "of drugs.",
            cost_breakdown="When generics enter: drug price drops 80-90%, becomes permanent public good",
        ),
    ),
]

_BY_ID: dict[int, Space] = {s.id: s for s in SPACES}

FINAL_SPACE_ID = SPACES[-1].id


def get_space_by_id(space_id: int) -> Space | None:
    return _BY_ID.get(space_id)


def get_phase_spaces(phase: GamePhase) -> list[Space]:
    return [s for s in SPACES if s.phase == phase]


def get_gate_spaces() -> list[Space]:
    return [s for s in SPACES if s.is_gate]
