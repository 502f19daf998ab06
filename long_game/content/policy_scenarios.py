"""Deterministic policy scenarios, inspired by RA Capital's policy writing.

Each scenario fires at one board space.  Some are restricted to a subset of
difficulty modes:

- **orphan**: limited IRA exposure, specialty pricing, little PBM pressure.
- **blockbuster**: full IRA impact and heavy PBM/insurance battles.
- **firstInClass**: accelerated approval paths and novel endpoint questions.
"""

from __future__ import annotations

from typing import Optional

from long_game.domain.board import PolicyChoice, PolicyScenario, ScenarioEducation
from long_game.domain.enums import Difficulty

POLICY_SCENARIOS: list[PolicyScenario] = [
    # ── Early game (all modes) ───────────────────────────────────────────
    PolicyScenario(
        id="drug-modality-choice",
        name="Choose Your Modality",
        trigger_space=1,
        description="As you identify your target, you must decide what type of drug to develop. "
                    "This choice has major implications for regulatory timelines and policy risk.",
        choices=[
            PolicyChoice(
                label="Small Molecule (Oral Pill)",
                consequence="Easier to manufacture, oral delivery preferred by patients. BUT: Only "
                            "9 years before Medicare price negotiation under the IRA.",
                investor_confidence_change=-10,
                lesson_if_chosen="The IRA's \"pill penalty\" gives small molecules only 9 years "
                                 "before price controls vs 13 years for biologics. This asymmetry "
                                 "is causing massive shifts in investment away from pills.",
            ),
            PolicyChoice(
                label="Large Molecule (Biologic/Antibody)",
                consequence="Requires injection, complex manufacturing. BUT: 13 years before "
                            "Medicare negotiation, more time to generate ROI.",
                investor_confidence_change=0,
                is_optimal_choice=True,
                lesson_if_chosen="Biologics get 4 extra years of market exclusivity. This is why "
                                 "you see more antibodies and fewer pills in development "
                                 "pipelines since the IRA passed.",
            ),
        ],
        educational_content=ScenarioEducation(
            title="The Pill Penalty",
            insight="The Inflation Reduction Act treats small molecules differently than "
                    "biologics. Pills face Medicare price negotiation after 9 years; biologics get "
                    "13 years. This 4-year difference can reduce a drug's value by 40%.",
            kolchinsky_quote="\"The pill penalty has made most early-stage, small-molecule drug "
                             "development projects for diseases common in older populations "
                             "uninvestable.\" (Peter Kolchinsky, RA Capital)",
        ),
    ),

    # ── Orphan: designation ──────────────────────────────────────────────
    PolicyScenario(
        id="orphan-drug-designation",
        name="Orphan Drug Designation",
        trigger_space=6,
        description="The FDA's Orphan Drug Program offers significant incentives for rare disease "
                    "drugs. You can apply for Orphan Drug Designation (ODD) to unlock tax credits "
                    "and 7 years of market exclusivity.",
        applicable_difficulties=[Difficulty.ORPHAN],
        choices=[
            PolicyChoice(
                label="Apply for Orphan Drug Designation",
                consequence="Receive 25% tax credit on clinical trial costs, fee waivers, and 7 "
                            "years market exclusivity upon approval, even beyond patent life.",
                capital_change=15,
                investor_confidence_change=10,
                is_optimal_choice=True,
                lesson_if_chosen="ODD provides powerful incentives that make rare disease drug "
                                 "development economically viable. Without these, most orphan "
                                 "drugs would never be developed.",
            ),
            PolicyChoice(
                label="Skip ODD application (faster timeline)",
                consequence="Save 3-6 months of regulatory work, but miss out on significant "
                            "financial benefits.",
                investor_confidence_change=-5,
                lesson_if_chosen="Most companies pursuing rare disease indications apply for ODD; "
                                 "the benefits are substantial.",
            ),
        ],
        educational_content=ScenarioEducation(
            title="The Orphan Drug Act Success Story",
            insight="Before the 1983 Orphan Drug Act, only 38 orphan drugs existed. Since then, "
                    "over 600 have been approved. The law's incentives transformed rare disease "
                    "from a market failure into a thriving sector.",
            kolchinsky_quote="\"Orphan drugs demonstrate that smart incentives work. The social "
                             "contract is alive and well in rare disease.\" (Industry analyst)",
        ),
    ),

    # ── First-in-class: breakthrough designation ─────────────────────────
    PolicyScenario(
        id="breakthrough-therapy-designation",
        name="Breakthrough Therapy Designation",
        trigger_space=14,
        description="Your novel mechanism is showing strong early efficacy. You may qualify for "
                    "Breakthrough Therapy Designation, which accelerates FDA interactions and "
                    "potentially enables approval on smaller trials.",
        applicable_difficulties=[Difficulty.FIRST_IN_CLASS],
        choices=[
            PolicyChoice(
                label="Apply for Breakthrough Therapy Designation",
                consequence="Intensive FDA guidance, rolling review, potential for accelerated "
                            "approval. But greater regulatory scrutiny and higher expectations.",
                investor_confidence_change=15,
                is_optimal_choice=True,
                lesson_if_chosen="Breakthrough designation can shave years off development time. "
                                 "For first-in-class drugs with strong efficacy signals, it's a "
                                 "powerful tool.",
            ),
            PolicyChoice(
                label="Pursue standard regulatory pathway",
                consequence="Conventional timeline with larger trials. More data but more time "
                            "and cost.",
                capital_change=-20,
                lesson_if_chosen="The standard path requires larger trials but provides more "
                                 "robust safety data for novel mechanisms.",
            ),
        ],
        educational_content=ScenarioEducation(
            title="Accelerated Approval Pathways",
            insight="FDA offers multiple expedited pathways: Breakthrough Therapy, Fast Track, "
                    "Accelerated Approval, and Priority Review. For novel mechanisms addressing "
                    "unmet needs, these can dramatically reduce time-to-market.",
            kolchinsky_quote="\"First-in-class drugs face regulatory uncertainty, but also get "
                             "regulatory flexibility when they address serious conditions with "
                             "unmet needs.\"",
        ),
    ),

    # ── Blockbuster: IRA impact ──────────────────────────────────────────
    PolicyScenario(
        id="ira-negotiation-looms-blockbuster",
        name="Analysts Model the IRA Impact",
        trigger_space=14,
        description="Your drug shows promise for a large Medicare population. Wall Street "
                    "analysts are modeling a 40%+ NPV reduction due to IRA price controls starting "
                    "9 years after approval (small molecules) or 13 years (biologics).",
        applicable_difficulties=[Difficulty.BLOCKBUSTER],
        choices=[
            PolicyChoice(
                label="Accept reduced long-term value (-40% projected revenue)",
                consequence="Continue development knowing that revenues will be capped after "
                            "9-13 years post-approval.",
                revenue_multiplier=0.6,
                investor_confidence_change=-15,
                lesson_if_chosen="The IRA clock starts at FDA approval, not during trials. For "
                                 "Medicare-heavy drugs, this 40% NPV reduction is reshaping "
                                 "pipeline priorities.",
            ),
            PolicyChoice(
                label="Accelerate timeline for faster approval",
                consequence="Seek Breakthrough Therapy Designation to launch faster and maximize "
                            "pre-negotiation revenues.",
                capital_change=-20,
                is_optimal_choice=True,
                lesson_if_chosen="Companies are racing to launch faster to maximize years before "
                                 "negotiation. The clock starts at approval, so faster approval "
                                 "= more revenue.",
            ),
            PolicyChoice(
                label="Partner with Big Pharma for global reach",
                consequence="License rights to a partner who can maximize international revenues "
                            "where the IRA does not apply.",
                capital_change=100,
                revenue_multiplier=0.5,
                lesson_if_chosen="Partnering trades upside for certainty. Big Pharma can offset "
                                 "US price controls with global revenues.",
            ),
        ],
        educational_content=ScenarioEducation(
            title="Medicare Negotiation (Clock Starts at Approval)",
            insight="The IRA allows Medicare to negotiate prices starting 9 years after FDA "
                    "approval for small molecules, or 13 years for biologics. This clock does NOT "
                    "start until approval, but analysts model the impact now.",
            kolchinsky_quote="\"Stay away from any disease of aging where you will be heavily "
                             "dependent on Medicare.\" (Investment advice since IRA passage)",
        ),
    ),

    # ── Orphan: IRA impact ───────────────────────────────────────────────
    PolicyScenario(
        id="ira-negotiation-looms-orphan",
        name="IRA Impact Assessment",
        trigger_space=14,
        description="Your rare disease drug serves a small patient population. While the IRA "
                    "technically applies, your Medicare exposure is limited. Analysts see less "
                    "impact than mass-market drugs.",
        applicable_difficulties=[Difficulty.ORPHAN],
        choices=[
            PolicyChoice(
                label="Continue with current pricing strategy",
                consequence="Your small Medicare population means limited IRA exposure. Maintain "
                            "premium orphan drug pricing.",
                investor_confidence_change=5,
                is_optimal_choice=True,
                lesson_if_chosen="Orphan drugs are relatively protected from IRA impact due to "
                                 "limited Medicare patient numbers and specialty pharmacy "
                                 "distribution.",
            ),
            PolicyChoice(
                label="Proactively offer value-based contract",
                consequence="Offer outcomes-based pricing to insurers. Builds goodwill but may "
                            "set precedent.",
                capital_change=-10,
                investor_confidence_change=0,
                lesson_if_chosen="Value-based contracts can work well for rare diseases where "
                                 "outcomes are clearly measurable.",
            ),
        ],
        educational_content=ScenarioEducation(
            title="Orphan Drugs and the IRA",
            insight="Rare disease drugs face less IRA pressure because their Medicare patient "
                    "populations are small. However, orphan drug pricing ($300K-$500K+/year) "
                    "still attracts policy attention.",
            kolchinsky_quote="\"The orphan drug model remains viable, but companies should still "
                             "plan for eventual price pressure.\"",
        ),
    ),

    # ── First-in-class: endpoints ────────────────────────────────────────
    PolicyScenario(
        id="novel-endpoint-negotiation",
        name="Novel Endpoint Challenge",
        trigger_space=16,
        description="As a first-in-class drug with a novel mechanism, there are no established "
                    "clinical endpoints. You must negotiate with FDA on what success looks like.",
        applicable_difficulties=[Difficulty.FIRST_IN_CLASS],
        choices=[
            PolicyChoice(
                label="Propose surrogate endpoint (faster, riskier)",
                consequence="Accelerated approval possible based on biomarker, but confirmatory "
                            "trial required post-approval.",
                investor_confidence_change=5,
                is_optimal_choice=True,
                lesson_if_chosen="Surrogate endpoints can dramatically accelerate approval for "
                                 "novel mechanisms, but post-marketing commitments are binding.",
            ),
            PolicyChoice(
                label="Use traditional clinical endpoint (slower, definitive)",
                consequence="Longer trial with hard clinical outcomes. More robust evidence but "
                            "2-3 years longer development.",
                capital_change=-50,
                lesson_if_chosen="Traditional endpoints provide the strongest evidence but "
                                 "require larger, longer, more expensive trials.",
            ),
        ],
        educational_content=ScenarioEducation(
            title="The Endpoint Challenge",
            insight="First-in-class drugs often lack validated endpoints. Working with FDA to "
                    "establish novel endpoints or use surrogate markers is critical for efficient "
                    "development.",
            kolchinsky_quote="\"Novel mechanisms require novel thinking about how we measure "
                             "success. This is where regulatory science meets clinical "
                             "innovation.\"",
        ),
    ),

    # ── Blockbuster: PBM rebates ─────────────────────────────────────────
    PolicyScenario(
        id="pbm-rebate-demand-blockbuster",
        name="PBM Demands Maximum Rebates",
        trigger_space=21,
        description="The \"Big 3\" PBMs (controlling 80% of the market) are demanding 40% "
                    "rebates, or they'll require prior authorization that blocks 50% of "
                    "prescriptions. This is the reality of blockbuster drug launches.",
        applicable_difficulties=[Difficulty.BLOCKBUSTER],
        choices=[
            PolicyChoice(
                label="Pay the 40% rebate for unrestricted access",
                consequence="Your net revenue drops significantly, but patients have easy "
                            "access. This is how the game is played.",
                revenue_multiplier=0.6,
                investor_confidence_change=-5,
                is_optimal_choice=True,
                lesson_if_chosen="PBMs extract 30-50% of blockbuster drug revenue. This is money "
                                 "that could fund more R&D, but without PBM access, your drug "
                                 "won't reach patients.",
            ),
            PolicyChoice(
                label="Negotiate 25% rebate with step therapy",
                consequence="Lower rebates but patients must fail cheaper drugs first. Some will "
                            "never reach your therapy.",
                revenue_multiplier=0.75,
                investor_confidence_change=-10,
                lesson_if_chosen="Step therapy requirements mean many patients never access "
                                 "newer, better therapies. This is the cost of resisting PBM "
                                 "demands.",
            ),
            PolicyChoice(
                label="Refuse rebates, go direct-to-patient",
                consequence="Bypass PBMs entirely with direct patient programs. Revolutionary but "
                            "risky.",
                capital_change=-30,
                investor_confidence_change=-15,
                lesson_if_chosen="Some companies are experimenting with PBM bypass strategies, "
                                 "but it's difficult when PBMs control 80% of commercially "
                                 "insured patients.",
            ),
        ],
        educational_content=ScenarioEducation(
            title="The PBM Blockbuster Tax",
            insight="For high-volume blockbuster drugs, PBMs have maximum leverage. They can "
                    "demand 30-50% rebates because your drug's success depends on broad formulary "
                    "access.",
            kolchinsky_quote="\"PBMs are now the largest extractors of value from the "
                             "pharmaceutical supply chain, yet provide questionable value to "
                             "patients.\"",
        ),
    ),

    # ── Orphan: specialty distribution ───────────────────────────────────
    PolicyScenario(
        id="specialty-distribution-orphan",
        name="Specialty Pharmacy Distribution",
        trigger_space=21,
        description="Rare disease drugs bypass traditional PBMs through specialty pharmacies. You "
                    "can negotiate directly with payers, but must set up patient support "
                    "programs.",
        applicable_difficulties=[Difficulty.ORPHAN],
        choices=[
            PolicyChoice(
                label="Partner with specialty pharmacy network + patient support",
                consequence="Higher distribution costs but direct patient relationships. Copay "
                            "assistance ensures access.",
                capital_change=-20,
                is_optimal_choice=True,
                lesson_if_chosen="The orphan drug model works differently: specialty pharmacies, "
                                 "patient support programs, and direct payer relationships. Less "
                                 "PBM pressure.",
            ),
            PolicyChoice(
                label="Try traditional pharmacy channels",
                consequence="Lower distribution costs but less patient support. May face "
                            "unexpected PBM demands.",
                investor_confidence_change=-10,
                lesson_if_chosen="Traditional channels work poorly for rare diseases; patients "
                                 "need specialized support and monitoring.",
            ),
        ],
        educational_content=ScenarioEducation(
            title="The Orphan Drug Distribution Model",
            insight="Rare disease drugs are distributed through specialty pharmacies that provide "
                    "patient support, adherence monitoring, and cold-chain logistics. This is "
                    "more expensive but necessary.",
            kolchinsky_quote="\"Orphan drugs require specialized distribution and patient "
                             "support. The economics are different from mass-market drugs.\"",
        ),
    ),

    # ── Insurance coverage (all modes) ───────────────────────────────────
    PolicyScenario(
        id="insurance-coverage-decision",
        name="Insurance Coverage Negotiation",
        trigger_space=19,
        description="You've submitted for FDA approval. Payers are deciding coverage and "
                    "out-of-pocket costs. This is where drug prices meet patient reality.",
        choices=[
            PolicyChoice(
                label="Premium pricing with copay assistance",
                consequence="High price to insurance, but manufacturer-funded copay assistance "
                            "ensures patient affordability.",
                capital_change=-30,
                is_optimal_choice=True,
                lesson_if_chosen="Copay assistance bridges the affordability gap, but it's a "
                                 "band-aid. The real fix is insurance reform to cap "
                                 "out-of-pocket costs.",
            ),
            PolicyChoice(
                label="Moderate pricing for broader access",
                consequence="Lower price means easier insurance approval and lower copays, but "
                            "less revenue for future R&D.",
                revenue_multiplier=0.7,
                investor_confidence_change=-10,
                lesson_if_chosen="Lower prices help today's patients but reduce capital for "
                                 "tomorrow's cures.",
            ),
        ],
        educational_content=ScenarioEducation(
            title="The Out-of-Pocket Problem",
            insight="Drug prices aren't the problem; out-of-pocket costs are. People already paid "
                    "for coverage. Charging them again at the pharmacy is the real injustice.",
            kolchinsky_quote="\"If a patient has insurance and can't afford a covered medicine, "
                             "that's not a drug pricing problem, that's an insurance design "
                             "problem.\" (Peter Kolchinsky)",
        ),
    ),

    # ── Approval: the social contract (all modes) ────────────────────────
    PolicyScenario(
        id="generic-clock-begins",
        name="The Social Contract",
        trigger_space=23,
        description="Congratulations! Your drug is approved. The IRA negotiation clock is now "
                    "ticking. Small molecules face Medicare price negotiation after 9 years; "
                    "biologics get 13 years. Eventually generics/biosimilars will enter and the "
                    "price will drop 80-90%.",
        choices=[
            PolicyChoice(
                label="I understand the bargain",
                consequence="High prices now fund the R&D. Cheap generics forever benefit "
                            "humanity. This is the deal.",
                is_optimal_choice=True,
                lesson_if_chosen="The biotech social contract: investors take enormous risk, "
                                 "patients pay high prices during exclusivity, then everyone "
                                 "benefits when costs drop 80-90%.",
            ),
        ],
        educational_content=ScenarioEducation(
            title="The Biotech Social Contract",
            insight="Every brand-name drug is destined to become a cheap generic. The high prices "
                    "during exclusivity fund the R&D and reward the risk-takers. When generics "
                    "enter, the drug becomes a permanent public good.",
            kolchinsky_quote="\"We are all like builders who build homes and look forward to "
                             "being paid a finite mortgage. Once a drug goes generic, it's like "
                             "society has paid off the mortgage.\" (Peter Kolchinsky)",
        ),
    ),
]

_BY_ID: dict[str, PolicyScenario] = {s.id: s for s in POLICY_SCENARIOS}


# ── Lookup ───────────────────────────────────────────────────────────────────

def get_scenario_for_space(
    space_id: int,
    difficulty: Optional[Difficulty] = None,
) -> PolicyScenario | None:
    """First scenario triggered at ``space_id`` for this difficulty.

    Restricted scenarios never match when no difficulty is given.
    """
    for scenario in POLICY_SCENARIOS:
        if scenario.trigger_space != space_id:
            continue
        if scenario.applicable_difficulties is None:
            return scenario
        if difficulty is not None and difficulty in scenario.applicable_difficulties:
            return scenario
    return None


def get_all_scenarios(difficulty: Optional[Difficulty] = None) -> list[PolicyScenario]:
    if difficulty is None:
        return list(POLICY_SCENARIOS)
    return [s for s in POLICY_SCENARIOS if s.applies_to(difficulty)]


def get_scenario_by_id(scenario_id: str) -> PolicyScenario | None:
    return _BY_ID.get(scenario_id)
