"""Narrative event pools for the six paths, plus universal approval events.

Each path owns a pool keyed by phase.  Universal events (``path_id='*'``)
join every path's pool.
"""

from __future__ import annotations

from long_game.domain.enums import PathEventType, PathPhase
from long_game.domain.path import EventChoice, EventReference, PathEvent

UNIVERSAL_PATH_ID = "*"

_D = PathEventType.DECISION
_N = PathEventType.NEWS


def _choice(
    choice_id: str,
    text: str,
    cost: float,
    time_impact: float,
    outcome: str,
    confidence: float | None = None,
    market_impact: float | None = None,
) -> EventChoice:
    return EventChoice(
        id=choice_id,
        text=text,
        cost=cost,
        time_impact=time_impact,
        outcome=outcome,
        confidence=confidence,
        market_impact=market_impact,
    )


def _event(
    event_id: str,
    path_id: str,
    phase: PathPhase,
    event_type: PathEventType,
    title: str,
    description: str,
    choices: list[EventChoice],
    reference: EventReference | None = None,
) -> PathEvent:
    return PathEvent(
        id=event_id,
        path_id=path_id,
        phase=phase,
        type=event_type,
        title=title,
        description=description,
        choices=choices,
        reference=reference,
    )


# ── Orphan small molecule: rare neurological disease ─────────────────────────

_OSM = "orphan-small-molecule"

ORPHAN_SM_EVENTS: list[PathEvent] = [
    _event(
        "osm-formulation-challenge", _OSM, PathPhase.DISCOVERY, _D,
        "Formulation Challenge",
        "Your liquid formulation is unstable - the compound degrades within weeks. "
        "For pediatric dosing, you need a liquid that parents can give at home. "
        "The chemistry team proposes two approaches.",
        [
            _choice("new-formulation", "Invest in new formulation chemistry", 4, 0.5,
                    "New approach stabilizes the liquid. Pediatric dosing solved.", 5),
            _choice("switch-capsule", "Switch to capsule form only", 1, 0.25,
                    "Capsules work for older patients. Still need liquid for infants.", -5),
        ],
        EventReference(
            source="FDA Guidance: Oral Formulations for Pediatric Patients (2022)",
            url="https://www.fda.gov/regulatory-information/search-fda-guidance-documents",
            learn_more="Pediatric formulation is a major challenge - many rare diseases affect "
                       "children, requiring palatable liquids or small tablets.",
        ),
    ),
    _event(
        "osm-biomarker-success", _OSM, PathPhase.DISCOVERY, _N,
        "Biomarker Success",
        "Blood protein levels correlate perfectly with motor function! This means you can "
        "measure drug activity with a simple blood test rather than waiting for clinical improvement.",
        [
            _choice("accelerate", "Use biomarker to accelerate trials", 0, -0.33,
                    "FDA agrees biomarker can support accelerated approval pathway.", 15),
        ],
        EventReference(
            source="FDA Biomarker Qualification Program",
            url="https://www.fda.gov/drugs/biomarker-qualification-program",
            learn_more="Validated biomarkers can reduce clinical trial duration by 30-50% by "
                       "providing earlier endpoints than clinical outcomes.",
        ),
    ),
    _event(
        "osm-animal-tox", _OSM, PathPhase.PRECLINICAL, _D,
        "Animal Toxicity Signal",
        "Retinal findings in monkeys after 6 months of dosing. The findings are subtle, but "
        "could signal safety concerns. You need to decide how to proceed.",
        [
            _choice("additional-studies", "Conduct additional ophthalmology studies", 6, 0.66,
                    "Studies show findings are reversible and species-specific. IND proceeds.", 5),
            _choice("proceed-monitoring", "Proceed with enhanced monitoring plan", 2, 0.25,
                    "FDA accepts approach but requires ocular monitoring in trials.", -5),
        ],
    ),
    _event(
        "osm-foundation-support", _OSM, PathPhase.PRECLINICAL, _N,
        "Patient Foundation Support",
        "The disease foundation has been watching your progress. They are impressed and want to help.",
        [
            _choice("accept-grant", "Accept $15M research grant", -15, 0,
                    "Non-dilutive funding! Foundation also helps with patient recruitment.", 10),
        ],
    ),
    _event(
        "osm-manufacturing-scale", _OSM, PathPhase.PHASE1, _D,
        "Manufacturing Scale-up",
        "Yield drops significantly at commercial scale - the synthesis that worked in the lab "
        "does not work in large reactors. Process development is needed.",
        [
            _choice("process-optimization", "Full process optimization", 3, 0.42,
                    "New synthesis route increases yield 3x. Manufacturing problem solved.", 5),
            _choice("outsource", "Outsource to specialty CMO", 5, 0.25,
                    "Higher cost per unit, but faster. Margins will be lower.", 0),
        ],
    ),
    _event(
        "osm-breakthrough", _OSM, PathPhase.PHASE1, _N,
        "Breakthrough Therapy Designation",
        "Based on your early Phase I data, FDA grants Breakthrough Therapy designation! This "
        "means intensive guidance and potentially faster review.",
        [
            _choice("accept", "Accept designation and intensive FDA engagement", 0, -0.33,
                    "Regular FDA meetings accelerate development. Clear path forward.", 20),
        ],
    ),
    _event(
        "osm-slow-enrollment", _OSM, PathPhase.PHASE2, _D,
        "Enrollment Challenge",
        "Families are choosing the existing biologic over your experimental oral treatment. "
        "Enrollment is 40% behind schedule. You need more trial sites internationally.",
        [
            _choice("add-sites", "Add international sites", 5, 0.58,
                    "European and Asian sites accelerate enrollment. Trial back on track.", 0),
            _choice("patient-support", "Enhanced patient support program", 3, 0.42,
                    "Travel support and family services help. Enrollment improves.", 5),
        ],
    ),
    _event(
        "osm-competitor", _OSM, PathPhase.PHASE2, _N,
        "Competitor Announcement",
        "A larger company announces a similar oral program for your disease. They are "
        "well-funded and have more resources. Investor confidence shaken.",
        [
            _choice("differentiate", "Emphasize your clinical lead and data", 2, 0,
                    "Investment community recognizes your 2-year head start.", -10),
        ],
    ),
    _event(
        "osm-positive-competitor-data", _OSM, PathPhase.PHASE3, _N,
        "Competitor Validates Target",
        "The existing biologic competitor just published 5-year follow-up data showing "
        "sustained benefit. This validates that your mechanism works long-term.",
        [
            _choice("leverage", "Use data to support your regulatory discussions", 0, 0,
                    "FDA accepts long-term target validation. Your approval path clearer.", 10),
        ],
    ),
    _event(
        "osm-fda-meeting", _OSM, PathPhase.APPROVAL, _N,
        "Positive FDA Meeting",
        "Pre-NDA meeting goes exceptionally well. FDA agrees to a single pivotal trial with "
        "historical control arm - no need for placebo!",
        [
            _choice("proceed", "File NDA with Priority Review request", 0, -0.25,
                    "Priority Review granted. 6-month review clock starts.", 15),
        ],
    ),
]


# ── Orphan biologic: spinal muscular atrophy ─────────────────────────────────

_OBI = "orphan-biologic"

ORPHAN_BIO_EVENTS: list[PathEvent] = [
    _event(
        "obi-delivery-challenge", _OBI, PathPhase.DISCOVERY, _D,
        "Drug Delivery Challenge",
        "Your oligonucleotide does not reach motor neurons when injected systemically. The "
        "blood-brain barrier blocks it. You need a different delivery approach.",
        [
            _choice("intrathecal", "Develop intrathecal (spinal) delivery", 5, 0.66,
                    "Spinal injection bypasses barrier. Drug reaches motor neurons.", 10),
            _choice("modify", "Modify chemistry for better penetration", 8, 1.0,
                    "New chemistry shows promise but needs more optimization.", 0),
        ],
    ),
    _event(
        "obi-foundation-advocacy", _OBI, PathPhase.DISCOVERY, _N,
        "Foundation Mobilizes Families",
        "The patient foundation has spent 30 years building a community. They are ready to "
        "help with your clinical trials.",
        [
            _choice("partner", "Partner closely with foundation", 0, -0.25,
                    "Foundation helps identify patients. Natural history data available.", 15),
        ],
    ),
    _event(
        "obi-manufacturing-complexity", _OBI, PathPhase.PRECLINICAL, _D,
        "Manufacturing Complexity",
        "Oligonucleotide synthesis at scale is harder than expected. Purity specifications "
        "are difficult to meet consistently.",
        [
            _choice("invest", "Invest in new manufacturing process", 4, 0.5,
                    "Process optimized. Consistent high purity achieved.", 5),
            _choice("partner", "Partner with specialty manufacturer", 2, 0.33,
                    "CMO expertise accelerates manufacturing. Royalty commitment made.", 0),
        ],
    ),
    _event(
        "obi-injection-protocol", _OBI, PathPhase.PHASE1, _D,
        "Infant Injection Protocol",
        "Developing a safe spinal injection protocol for infants is proving difficult. "
        "Parents are understandably nervous.",
        [
            _choice("specialist", "Train specialized pediatric centers", 2, 0.33,
                    "Expert centers develop safe, standardized protocols.", 5),
            _choice("sedation", "Develop sedation protocol", 1, 0.25,
                    "Sedation makes procedure easier but adds safety monitoring.", 0),
        ],
    ),
    _event(
        "obi-expanded-access", _OBI, PathPhase.PHASE1, _N,
        "Expanded Access Success",
        "A desperately ill infant received your drug through compassionate use. The results "
        "exceeded expectations - dramatic improvement within weeks.",
        [
            _choice("publicize", "Share results with medical community", 0, 0,
                    "Word spreads. Enrollment accelerates. Hope builds.", 10),
        ],
    ),
    _event(
        "obi-natural-history", _OBI, PathPhase.PHASE2, _D,
        "Natural History Data Gap",
        "FDA requests more data on disease progression without treatment. They need a "
        "comparison for your single-arm trial.",
        [
            _choice("retrospective", "Fund retrospective natural history study", 3, 0.5,
                    "Historical data shows stark contrast with your treatment effect.", 5),
            _choice("registry", "Partner with foundation registry", 1, 0.25,
                    "Foundation data supports your regulatory case.", 5),
        ],
    ),
    _event(
        "obi-pricing-controversy", _OBI, PathPhase.PHASE2, _N,
        "Pricing Questions",
        "Advocacy groups are questioning the expected price point. Media attention is growing.",
        [
            _choice("patient-access", "Announce robust patient access program", 5, 0,
                    "Commitment to access calms concerns. Price discussion continues.", -8),
        ],
    ),
    _event(
        "obi-trial-stopped-early", _OBI, PathPhase.PHASE3, _N,
        "Trial Stopped Early for Efficacy",
        "The Data Monitoring Committee has stopped your trial early! The drug clearly works - "
        "51% of treated infants are achieving motor milestones that zero untreated infants achieve.",
        [
            _choice("celebrate", "Prepare for accelerated filing", 0, -0.5,
                    "Historic moment. First-ever treatment for this disease on the horizon.", 25),
        ],
    ),
    _event(
        "obi-priority-voucher", _OBI, PathPhase.APPROVAL, _N,
        "Priority Review Voucher",
        "Your rare pediatric disease approval qualifies for a Priority Review Voucher - a "
        "transferable asset that can be sold to another company.",
        [
            _choice("sell", "Sell voucher (current market: $100M)", -100, 0,
                    "Non-dilutive funding! Helps build commercial infrastructure.", 5),
            _choice("hold", "Hold voucher for future program", 0, 0,
                    "Asset preserved for pipeline expansion.", 0),
        ],
    ),
]


# ── Blockbuster small molecule: cardiovascular disease ───────────────────────

_BSM = "blockbuster-small-molecule"

BLOCKBUSTER_SM_EVENTS: list[PathEvent] = [
    _event(
        "bsm-program-nearly-killed", _BSM, PathPhase.DISCOVERY, _D,
        "Board Debates Killing Program",
        "Management questions the value of being 5th to market. The board is divided. Four "
        "drugs already exist - why invest hundreds of millions more?",
        [
            _choice("fight", "Present case: best beats first", 2, 0.25,
                    "Data showing 3-4x potency convinces board. Program continues.", -15),
            _choice("reduce", "Reduce scope to save costs", 0, 0.5,
                    "Smaller team, slower progress, but survival.", -20),
        ],
    ),
    _event(
        "bsm-competitor-merger", _BSM, PathPhase.PRECLINICAL, _N,
        "Competitor Merger",
        "Two of your competitors have merged. Their combined sales force is now the largest "
        "in cardiovascular medicine.",
        [
            _choice("differentiate", "Double down on clinical differentiation", 5, 0,
                    "Focus on being measurably better, not just different.", -10),
        ],
    ),
    _event(
        "bsm-head-to-head", _BSM, PathPhase.PHASE1, _N,
        "Head-to-Head Data",
        "Your Phase I data is in. Direct comparison shows 20% better LDL lowering than the "
        "market leader at equivalent doses.",
        [
            _choice("publish", "Publish and present at major conference", 1, 0,
                    "Medical community takes notice. Being 5th matters less.", 15),
        ],
    ),
    _event(
        "bsm-muscle-side-effects", _BSM, PathPhase.PHASE2, _D,
        "Muscle Pain Reports",
        "Reports of muscle pain (myalgia) are emerging. Statins are known for this, but your "
        "rate seems higher than competitors.",
        [
            _choice("study", "Conduct additional muscle safety study", 8, 0.5,
                    "Data shows rate similar to competitors at equivalent efficacy doses.", 0),
            _choice("monitoring", "Add monitoring to label", 2, 0.25,
                    "Label warning added. Some prescriber concern.", -10),
        ],
    ),
    _event(
        "bsm-drug-interaction", _BSM, PathPhase.PHASE2, _N,
        "Drug Interaction Found",
        "A significant interaction with a common antibiotic has been discovered. Patients "
        "taking both drugs have elevated statin levels.",
        [
            _choice("label", "Add interaction warning to label", 1, 0.33,
                    "Label updated. Prescribers educated. Manageable issue.", -5),
        ],
    ),
    _event(
        "bsm-enrollment-extended", _BSM, PathPhase.PHASE3, _D,
        "Outcomes Trial Extension",
        "Your 10,000-patient outcomes trial needs more cardiovascular events to reach "
        "statistical power. You need to either extend the trial or add more sites.",
        [
            _choice("extend", "Extend trial duration 12 months", 25, 1.0,
                    "More events accumulated. Statistical power achieved.", 0),
            _choice("sites", "Add high-risk population sites", 35, 0.5,
                    "Faster event accrual. Trial completes on schedule.", 5),
        ],
    ),
    _event(
        "bsm-outcomes-success", _BSM, PathPhase.PHASE3, _N,
        "Outcomes Trial Success",
        "Your outcomes trial shows significant reduction in cardiovascular events - heart "
        "attacks, strokes, and cardiovascular death. This changes everything.",
        [
            _choice("announce", "Major press conference and publication", 2, 0,
                    "World takes notice. This is no longer just another statin.", 25),
        ],
    ),
    _event(
        "bsm-dtc-advertising", _BSM, PathPhase.APPROVAL, _N,
        "DTC Advertising Enabled",
        "FDA has recently allowed direct-to-consumer TV advertising for prescription drugs. "
        "\"Ask your doctor about...\" campaigns are now possible.",
        [
            _choice("launch", "Launch major DTC campaign", 50, 0,
                    "Brand awareness explodes. Patients requesting by name.", 10, 0.20),
            _choice("modest", "Modest physician-focused marketing", 15, 0,
                    "Professional approach. Slower adoption but respected.", 5),
        ],
    ),
    _event(
        "bsm-partnership", _BSM, PathPhase.APPROVAL, _D,
        "Major Partnership Offer",
        "A major pharma company wants to co-market your drug with their sales force. $500M "
        "upfront, but they want co-promotion rights.",
        [
            _choice("accept", "Accept partnership", -500, 0,
                    "Massive commercial infrastructure. Blockbuster potential.", 15, 0.30),
            _choice("decline", "Build your own commercial capability", 100, 0,
                    "Keep full economics. Higher risk, higher reward.", 0),
        ],
    ),
    _event(
        "bsm-generic-competition", _BSM, PathPhase.APPROVAL, _N,
        "First Statin Goes Generic",
        "The first approved statin has gone generic. Price pressure is coming to the entire "
        "class. Payers are questioning brand drug prices.",
        [
            _choice("value", "Emphasize superior efficacy data", 5, 0,
                    "Value story holds for now. Premium pricing maintained.", -5, -0.15),
        ],
    ),
]


# ── Blockbuster biologic: cancer immunotherapy ───────────────────────────────

_BBI = "blockbuster-biologic"

BLOCKBUSTER_BIO_EVENTS: list[PathEvent] = [
    _event(
        "bbi-program-nearly-sold", _BBI, PathPhase.DISCOVERY, _D,
        "New Management - Program at Risk",
        "Your company was acquired. New management marked the checkpoint program "
        "\"low priority\" and is considering selling it.",
        [
            _choice("advocate", "Internal advocacy campaign", 2, 0.25,
                    "New leadership convinced. Program gets another chance.", -20),
            _choice("partner", "Find external partner to share risk", 0, 0.5,
                    "Partner brings credibility and funding.", -10),
        ],
    ),
    _event(
        "bbi-competitor-validates", _BBI, PathPhase.PRECLINICAL, _N,
        "Competitor Validates Concept",
        "A competitor just proved checkpoint inhibition works with a different target. They "
        "are ahead of you - but they have validated the entire approach.",
        [
            _choice("accelerate", "Double down and accelerate", 20, -0.25,
                    "Race is on. Your target may be better than theirs.", -10),
        ],
    ),
    _event(
        "bbi-complete-responses", _BBI, PathPhase.PHASE1, _N,
        "Complete Responses Observed",
        "Remarkable: Some patients with \"terminal\" metastatic cancer now have no detectable "
        "disease. Complete responses in patients who were weeks from death.",
        [
            _choice("expand", "Rapidly expand trials", 15, 0,
                    "More tumor types tested. Responses seen across cancers.", 20),
        ],
    ),
    _event(
        "bbi-autoimmune-toxicity", _BBI, PathPhase.PHASE1, _D,
        "Autoimmune Toxicity",
        "Releasing immune brakes is causing autoimmune side effects. Patients developing "
        "severe colitis, hepatitis, and skin reactions. About 20% affected.",
        [
            _choice("protocols", "Develop toxicity management protocols", 10, 0.5,
                    "Steroid protocols established. Toxicity manageable if caught early.", 0),
            _choice("exclusion", "Exclude autoimmune-prone patients", 5, 0.25,
                    "Smaller eligible population but safer profile.", -5),
        ],
    ),
    _event(
        "bbi-manufacturing-scale", _BBI, PathPhase.PHASE2, _D,
        "Manufacturing Scale Challenge",
        "Antibody production at commercial scale is proving difficult. Cell culture yields "
        "are inconsistent.",
        [
            _choice("new-facility", "Build or contract new manufacturing", 15, 0.66,
                    "Large-scale production capability secured.", 5),
            _choice("optimize", "Optimize existing process", 8, 0.5,
                    "Yields improve but capacity still limited.", 0),
        ],
    ),
    _event(
        "bbi-biomarker", _BBI, PathPhase.PHASE2, _N,
        "Biomarker Discovered",
        "PD-L1 expression on tumors predicts response! Patients with high expression respond "
        "much better. Better patient selection now possible.",
        [
            _choice("companion", "Develop companion diagnostic", 10, 0.33,
                    "Precision medicine approach. Higher response rates.", 15),
        ],
    ),
    _event(
        "bbi-beat-competitor", _BBI, PathPhase.PHASE3, _N,
        "Beat Competitor to Approval",
        "You filed for approval 3 months before your competitor. The race is won.",
        [
            _choice("celebrate", "Prepare for launch", 0, 0,
                    "First-mover advantage in immune checkpoint market.", 25),
        ],
    ),
    _event(
        "bbi-immune-death", _BBI, PathPhase.PHASE3, _D,
        "Fatal Immune-Related Event",
        "A patient has died from severe immune-related pneumonitis. The first "
        "treatment-related death in your trials.",
        [
            _choice("protocol", "Amend protocol and continue", 5, 0.25,
                    "Enhanced monitoring prevents future events. Trial continues.", -10),
            _choice("pause", "Pause enrollment for safety review", 3, 0.5,
                    "Thorough review. FDA satisfied with safety measures.", -5),
        ],
    ),
    _event(
        "bbi-lung-cancer", _BBI, PathPhase.APPROVAL, _N,
        "Lung Cancer Expansion",
        "Your drug is approved for non-small cell lung cancer - the #1 cancer killer. Market "
        "potential explodes.",
        [
            _choice("expand", "Pursue 10 more tumor types", 50, 0,
                    "Platform effect: one drug, many cancers.", 10, 1.0),
        ],
    ),
    _event(
        "bbi-combination", _BBI, PathPhase.APPROVAL, _N,
        "Combination Approval",
        "Your drug combined with another checkpoint inhibitor shows even better results. "
        "Combination approved.",
        [
            _choice("launch", "Launch combination regimen", 10, 0,
                    "Highest response rates yet. New standard of care.", 15, 0.50),
        ],
    ),
]


# ── First-in-class small molecule: CML targeted therapy ──────────────────────

_FSM = "firstinclass-small-molecule"

FIRSTINCLASS_SM_EVENTS: list[PathEvent] = [
    _event(
        "fsm-funding-skepticism", _FSM, PathPhase.DISCOVERY, _D,
        "Investor Skepticism",
        "Novel target means hard to fund. Investors want proven biology. \"You are targeting "
        "something nobody has ever targeted successfully.\"",
        [
            _choice("persist", "Persist with VC fundraising", 2, 0.5,
                    "Eventually find believers. Funding secured but delayed.", -15),
            _choice("academic", "Seek academic/foundation grants", 0, 0.25,
                    "Non-dilutive funding from leukemia foundation.", 0),
        ],
    ),
    _event(
        "fsm-dog-liver-tox", _FSM, PathPhase.PRECLINICAL, _D,
        "Dog Liver Toxicity",
        "SEVERE liver damage in dogs. The board is debating killing the program. This could "
        "be a species-specific effect... or it could kill patients.",
        [
            _choice("monkey", "Test in monkeys (more relevant species)", 8, 0.66,
                    "Monkey studies favorable! Dog toxicity appears species-specific.", -25),
            _choice("stop", "Kill the program (too risky)", 0, 0,
                    "Program terminated. Story ends.", -100),
        ],
    ),
    _event(
        "fsm-academic-champion", _FSM, PathPhase.PRECLINICAL, _N,
        "Academic Champion",
        "A renowned hematologist at a major cancer center has become fascinated by your "
        "science. They want to run investigator-initiated trials.",
        [
            _choice("collaborate", "Provide drug for academic studies", 2, 0,
                    "Key opinion leader becomes passionate advocate.", 15),
        ],
    ),
    _event(
        "fsm-100-percent-response", _FSM, PathPhase.PHASE1, _N,
        "100% Response Rate",
        "ALL 31 patients in Phase I responded to treatment. 100%. This has never happened in "
        "oncology. Ever. \"The room went silent. Everyone knew we had something special.\"",
        [
            _choice("accelerate", "Accelerate development immediately", 10, -0.5,
                    "Expanded trials planned. Historic data in hand.", 40),
        ],
    ),
    _event(
        "fsm-resistance", _FSM, PathPhase.PHASE2, _N,
        "Resistance Mutations Emerge",
        "Some patients who initially responded are developing resistance. Mutations in the "
        "target enzyme allow cancer cells to escape.",
        [
            _choice("next-gen", "Start developing next-generation inhibitor", 15, 0,
                    "Second-line drug development begins.", -10),
        ],
    ),
    _event(
        "fsm-patent-dispute", _FSM, PathPhase.PHASE2, _D,
        "Patent Dispute",
        "University claims rights to early discoveries. They want more royalties than "
        "originally agreed.",
        [
            _choice("settle", "Settle quickly", 5, 0,
                    "Higher royalty but preserved timeline and relationship.", 0),
            _choice("fight", "Litigate aggressively", 3, 0.5,
                    "Court favors you but relationship damaged.", -5),
        ],
    ),
    _event(
        "fsm-manufacturing", _FSM, PathPhase.PHASE3, _D,
        "Manufacturing Scale Challenge",
        "Scaling synthesis of your complex molecule is proving difficult. Commercial-scale "
        "yields are inconsistent.",
        [
            _choice("new-route", "Develop new synthesis route", 8, 0.66,
                    "New route found. 3x yield improvement.", 5),
            _choice("multiple", "Qualify multiple manufacturers", 10, 0.5,
                    "Supply chain diversified. Costs higher but secure.", 5),
        ],
    ),
    _event(
        "fsm-time-cover", _FSM, PathPhase.PHASE3, _N,
        "TIME Magazine Cover",
        "Your drug is featured on the cover of TIME: \"Magic Bullet for Cancer.\" Public "
        "awareness explodes. This is now a story everyone knows.",
        [
            _choice("leverage", "Use attention to build support", 0, 0,
                    "Patient advocacy strengthens. Regulatory support increases.", 20),
        ],
    ),
    _event(
        "fsm-fast-track", _FSM, PathPhase.APPROVAL, _N,
        "Fastest Cancer Drug Review Ever",
        "FDA has reviewed and approved your drug in just 10 weeks - the fastest cancer drug "
        "approval in FDA history.",
        [
            _choice("launch", "Launch immediately", 0, -0.5,
                    "Patients who were dying now have hope.", 25),
        ],
    ),
    _event(
        "fsm-expanded-indications", _FSM, PathPhase.APPROVAL, _N,
        "Expanded Indications",
        "Your kinase inhibitor works in other cancers with the same target (GIST, "
        "dermatofibrosarcoma). Multiple additional approvals are possible.",
        [
            _choice("pursue", "Pursue 5 additional indications", 30, 0,
                    "One drug becomes a platform. Market expands 50%.", 10, 0.50),
        ],
    ),
]


# ── First-in-class biologic: first checkpoint inhibitor ──────────────────────

_FBI = "firstinclass-biologic"

FIRSTINCLASS_BIO_EVENTS: list[PathEvent] = [
    _event(
        "fbi-century-failure", _FBI, PathPhase.DISCOVERY, _D,
        "A Century of Failure",
        "Immunotherapy for cancer has failed for 100 years. Every previous attempt failed. "
        "Investors are deeply skeptical. \"Why would this work when nothing else has?\"",
        [
            _choice("persist", "Persist with the science", 3, 0.5,
                    "Find true believers willing to fund the attempt.", -20),
            _choice("smaller", "Start smaller, prove in mice first", 1, 0.75,
                    "Mouse data eventually convinces investors.", -10),
        ],
    ),
    _event(
        "fbi-autoimmunity-concern", _FBI, PathPhase.PRECLINICAL, _N,
        "Autoimmunity Concerns",
        "Releasing immune brakes might cause autoimmunity - the immune system attacking "
        "healthy tissue. Mice develop inflammation in multiple organs.",
        [
            _choice("proceed", "Proceed with careful monitoring", 3, 0.25,
                    "Additional safety monitoring protocols developed.", -10),
        ],
    ),
    _event(
        "fbi-first-patient", _FBI, PathPhase.PHASE1, _N,
        "First Patient Response",
        "A young woman with metastatic melanoma. Her tumor had collapsed her lung. Doctors "
        "were about to send her to hospice. After treatment, her tumor shrank enough for "
        "surgery. She survived.",
        [
            _choice("expand", "Expand enrollment aggressively", 10, 0,
                    "More patients enrolled. More responses. Hope builds.", 25),
        ],
    ),
    _event(
        "fbi-severe-colitis", _FBI, PathPhase.PHASE1, _D,
        "Severe Autoimmune Toxicity",
        "Patients are developing severe colitis, hepatitis, and skin reactions. The immune "
        "system is attacking itself. About 20% are seriously affected.",
        [
            _choice("steroids", "Develop steroid management protocols", 8, 0.66,
                    "Toxicity manageable with steroids if caught early.", 0),
            _choice("dose-reduce", "Reduce dose to minimize toxicity", 5, 0.5,
                    "Lower toxicity but also lower efficacy.", -10),
        ],
    ),
    _event(
        "fbi-slow-enrollment", _FBI, PathPhase.PHASE2, _D,
        "Enrollment Challenges",
        "Melanoma patients have few options but are still hesitant about a completely novel "
        "approach. Immunotherapy has such a bad history.",
        [
            _choice("sites", "Add more specialized sites", 4, 0.5,
                    "Major melanoma centers drive enrollment.", 0),
            _choice("education", "Physician education campaign", 2, 0.33,
                    "Doctors become more comfortable with the approach.", 5),
        ],
    ),
    _event(
        "fbi-durable-responses", _FBI, PathPhase.PHASE2, _N,
        "Durable Responses",
        "Patients who responded are STILL responding years later. Some are now effectively "
        "cancer-free. This is unprecedented in metastatic melanoma.",
        [
            _choice("publish", "Publish long-term data", 1, 0,
                    "Medical community takes notice. Paradigm shift begins.", 20),
        ],
    ),
    _event(
        "fbi-trial-deaths", _FBI, PathPhase.PHASE3, _D,
        "Fatal Immune Events",
        "Two patients have died from severe immune-related adverse events. First "
        "treatment-related deaths in the program.",
        [
            _choice("pause", "Pause for comprehensive safety review", 3, 0.5,
                    "Thorough review. Enhanced protocols. FDA satisfied.", -10),
            _choice("continue", "Continue with enhanced monitoring", 2, 0.25,
                    "Faster but scrutiny increases.", -15),
        ],
    ),
    _event(
        "fbi-survival-benefit", _FBI, PathPhase.PHASE3, _N,
        "Survival Benefit Proven",
        "First-ever survival improvement in metastatic melanoma! Your drug extends life by "
        "months, with 20% achieving long-term survival.",
        [
            _choice("historic", "Prepare for historic filing", 0, 0,
                    "First immune checkpoint inhibitor heads to FDA.", 30),
        ],
    ),
    _event(
        "fbi-patient-advocates", _FBI, PathPhase.APPROVAL, _N,
        "Survivor Advocacy",
        "Survivors of your trials become powerful voices. They testify at FDA advisory "
        "committees. Their stories are compelling.",
        [
            _choice("support", "Support patient advocacy efforts", 1, 0,
                    "Human impact drives regulatory and public support.", 15),
        ],
    ),
    _event(
        "fbi-nobel-connection", _FBI, PathPhase.APPROVAL, _N,
        "Nobel Prize Science",
        "The scientists who discovered your target are being recognized with major awards. "
        "The scientific legacy of your work is becoming clear.",
        [
            _choice("celebrate", "Acknowledge the scientific pioneers", 0, 0,
                    "Your drug made Nobel Prize science into medicine.", 10),
        ],
    ),
]


# ── Universal ────────────────────────────────────────────────────────────────

UNIVERSAL_EVENTS: list[PathEvent] = [
    _event(
        "universal-pbm-negotiation", UNIVERSAL_PATH_ID, PathPhase.APPROVAL, _D,
        "The PBM Negotiation",
        "Your drug has a list price of $50,000/year. But this is not what patients pay. "
        "Pharmacy Benefit Managers (PBMs) want a 40% rebate to put you on their formulary. "
        "Without it, patients cannot access your drug.",
        [
            _choice("accept-rebates", "Accept the rebate system (industry standard)", 0, 0,
                    "Drug gets formulary placement. Net revenue 40% lower than list price.", 5),
            _choice("lower-list-price", "Lower list price, refuse large rebates", 0, 0.25,
                    "Some PBMs may not cover you. Risky but innovative.", -5, -0.15),
        ],
    ),
    _event(
        "universal-insurance-affordability", UNIVERSAL_PATH_ID, PathPhase.APPROVAL, _N,
        "Patient Affordability Crisis",
        "Patients are struggling to afford your drug. Your list price is $50K, insurers pay "
        "$30K (after rebates), but patients with high-deductible plans pay copays based on "
        "the LIST price.",
        [
            _choice("copay-assistance", "Launch copay assistance program", 20, 0,
                    "Patients pay $0-$35/month. Company covers the rest.", 15),
            _choice("advocate-reform", "Publicly advocate for insurance reform", 5, 0,
                    "Join coalition supporting out-of-pocket caps.", 5),
        ],
    ),
]


# ── Lookup ───────────────────────────────────────────────────────────────────

PATH_EVENTS: dict[str, list[PathEvent]] = {
    _OSM: ORPHAN_SM_EVENTS,
    _OBI: ORPHAN_BIO_EVENTS,
    _BSM: BLOCKBUSTER_SM_EVENTS,
    _BBI: BLOCKBUSTER_BIO_EVENTS,
    _FSM: FIRSTINCLASS_SM_EVENTS,
    _FBI: FIRSTINCLASS_BIO_EVENTS,
}


def get_events_for_path(path_id: str) -> list[PathEvent]:
    """Every event a path can draw: its own pool plus the universal events."""
    return [*PATH_EVENTS.get(path_id, []), *UNIVERSAL_EVENTS]


def get_events_for_phase(path_id: str, phase: PathPhase) -> list[PathEvent]:
    return [e for e in get_events_for_path(path_id) if e.phase == phase]
