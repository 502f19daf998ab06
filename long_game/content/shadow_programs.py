"""The nine parallel programs that fail while the player's drug survives.

Failure points lean toward Phase II, where most real attrition happens.
Costs average ~$180M each, the industry figure for a failed program.
"""

from __future__ import annotations

from long_game.domain.board import ShadowProgram, ShadowProgramState

SHADOW_PROGRAMS: list[ShadowProgram] = [
    ShadowProgram(
        id="shadow-kinase-screen",
        name="SK-101 Kinase Inhibitor",
        scientist="Dr. Maya Okafor",
        scientist_background="Left a tenured post to chase a kinase she had studied for 12 years",
        target_disease="Idiopathic pulmonary fibrosis",
        failure_space=3,
        failure_reason="The screen produced no hits with acceptable selectivity",
        cost_at_failure=5,
        vignette="Two hundred thousand compounds, and not one that hit the target without "
                 "hitting everything else. She kept the plate maps on her wall for a year.",
        phase_failure_rate=20,
    ),
    ShadowProgram(
        id="shadow-liver-signal",
        name="HX-22 Metabolic Modulator",
        scientist="Dr. Tomas Lindqvist",
        scientist_background="Former big-pharma chemist on his first startup",
        target_disease="Nonalcoholic steatohepatitis (NASH)",
        failure_space=7,
        failure_reason="Exploratory toxicology showed liver enzyme elevations in two species",
        cost_at_failure=20,
        vignette="The rats told the story in week three. Nobody argued with the histology; "
                 "the team was reassigned by Friday.",
        phase_failure_rate=35,
    ),
    ShadowProgram(
        id="shadow-cardiac-qt",
        name="RV-7 Ion Channel Blocker",
        scientist="Dr. Priya Raman",
        scientist_background="Electrophysiologist who built the assay herself",
        target_disease="Treatment-resistant epilepsy",
        failure_space=9,
        failure_reason="QT prolongation in GLP dog studies made the safety margin unworkable",
        cost_at_failure=45,
        vignette="The seizure data were beautiful. The ECG traces were not. She still gets "
                 "emails from parents asking when the trial will open.",
        phase_failure_rate=45,
    ),
    ShadowProgram(
        id="shadow-pk-exposure",
        name="BT-340 Oral Peptide",
        scientist="Dr. Samuel Adeyemi",
        scientist_background="Formulation scientist with three approved products behind him",
        target_disease="Type 2 diabetes",
        failure_space=12,
        failure_reason="Oral bioavailability in humans was under 1%, far below animal models",
        cost_at_failure=80,
        vignette="First-in-human went smoothly, which made it worse: the drug was safe because "
                 "almost none of it reached the blood.",
        phase_failure_rate=55,
    ),
    ShadowProgram(
        id="shadow-amyloid-poc",
        name="NX-12 Amyloid Antibody",
        scientist="Dr. Elena Vasquez",
        scientist_background="Neurologist who watched her father decline for a decade",
        target_disease="Early Alzheimer's disease",
        failure_space=14,
        failure_reason="No separation from placebo on cognition despite clearing plaque",
        cost_at_failure=150,
        vignette="The PET scans showed the plaque melting away. The memory scores never moved. "
                 "She presented the data herself and did not skip a slide.",
        phase_failure_rate=75,
    ),
    ShadowProgram(
        id="shadow-dose-window",
        name="IM-58 Immune Modulator",
        scientist="Dr. Hiroshi Tanaka",
        scientist_background="Immunologist, second company after a successful exit",
        target_disease="Moderate-to-severe ulcerative colitis",
        failure_space=15,
        failure_reason="Every dose that worked also caused serious infections",
        cost_at_failure=200,
        vignette="The therapeutic window closed from both sides at once. Four dose arms, one "
                 "conclusion, and a board meeting he still describes as the longest hour of his "
                 "career.",
        phase_failure_rate=80,
    ),
    ShadowProgram(
        id="shadow-pivotal-miss",
        name="CR-9 Cardiometabolic Agent",
        scientist="Dr. Anna Kowalski",
        scientist_background="Cardiologist who ran the Phase II study as principal investigator",
        target_disease="Heart failure with preserved ejection fraction",
        failure_space=16,
        failure_reason="The first pivotal trial missed its primary endpoint (p = 0.09)",
        cost_at_failure=350,
        vignette="Six thousand patients, four years, and a p-value that landed on the wrong "
                 "side of the line. The stock fell 70% before the opening bell.",
        phase_failure_rate=85,
    ),
    ShadowProgram(
        id="shadow-second-pivotal",
        name="OB-4 Oncology Bispecific",
        scientist="Dr. Marcus Hale",
        scientist_background="Oncologist and serial founder, three IPOs",
        target_disease="Relapsed multiple myeloma",
        failure_space=17,
        failure_reason="The confirmatory trial failed to replicate the first study's benefit",
        cost_at_failure=450,
        vignette="One positive pivotal trial is a hypothesis; two is a drug. The second one "
                 "came back flat, and 140 people lost their jobs within the month.",
        phase_failure_rate=88,
    ),
    ShadowProgram(
        id="shadow-adcomm-vote",
        name="PN-31 Pain Therapeutic",
        scientist="Dr. Grace Mbeki",
        scientist_background="Anesthesiologist who spent 15 years on non-opioid analgesia",
        target_disease="Chronic osteoarthritis pain",
        failure_space=21,
        failure_reason="The advisory committee voted 11-4 that benefits did not outweigh joint "
                       "safety risks",
        cost_at_failure=320,
        vignette="She sat in the front row for the vote. Fifteen years of work, undone by a "
                 "safety signal that appeared in the last 2% of patients.",
        phase_failure_rate=90,
    ),
]

_BY_ID: dict[str, ShadowProgram] = {p.id: p for p in SHADOW_PROGRAMS}


def get_shadow_program(program_id: str) -> ShadowProgram | None:
    return _BY_ID.get(program_id)


def get_programs_failing_at_space(space_id: int) -> list[ShadowProgram]:
    """All programs that fail at a space, in catalog order."""
    return [p for p in SHADOW_PROGRAMS if p.failure_space == space_id]


def initial_shadow_states() -> list[ShadowProgramState]:
    return [ShadowProgramState(program=p) for p in SHADOW_PROGRAMS]
