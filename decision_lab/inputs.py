# decision_lab/inputs.py
"""Per-input metadata for the six frameworks, plus the built-in example case.

The AI hint prompts describe each input to the model using this table.
"""
from dataclasses import dataclass

from decision_lab.models import FrameworkId, Scenario


@dataclass(frozen=True)
class InputMeta:
    label: str
    description: str
    hint_guidance: str


INPUT_METADATA: dict[FrameworkId, dict[str, InputMeta]] = {
    FrameworkId.COMPETITION: {
        "performancePressure": InputMeta(
            "Performance Pressure",
            "How much does the market demand continuous performance improvements?",
            "Help the student assess whether this industry rewards performance differentiation. "
            "How fast is the technology improving? Do customers pay premiums for better performance?",
        ),
        "costPressure": InputMeta(
            "Cost Reduction Pressure",
            "How intense is the pressure to reduce costs in this component/capability?",
            "Help the student think about pricing competition. Is the market commoditizing? "
            "Are margins shrinking? Is price the primary basis of competition?",
        ),
    },
    FrameworkId.TECHNOLOGY: {
        "currentPhase": InputMeta(
            "Technology Lifecycle Phase",
            "Where is the current technology in its S-curve lifecycle?",
            "Help the student place this technology on the S-curve: nascent, maturing with "
            "predictable gains, or approaching physical limits. What evidence supports it?",
        ),
        "emergingThreat": InputMeta(
            "Emerging Alternative",
            "Is there an emerging alternative technology that could disrupt the current approach?",
            "Help the student consider disruptions. Which new technologies could make the current "
            "approach obsolete, how viable are they, and on what timeline?",
        ),
    },
    FrameworkId.TRANSACTION_COST: {
        "assetSpecificity": InputMeta(
            "Asset Specificity",
            "How customized must this technology be for your specific needs?",
            "Help the student judge how specialized the required investments are and whether "
            "they would be useful outside this relationship.",
        ),
        "uncertainty": InputMeta(
            "Environmental Uncertainty",
            "How predictable is the future environment (regulatory, competitive, technological)?",
            "Help the student assess how predictable requirements are over the next 3-5 years. "
            "High uncertainty makes complete contracts hard to write.",
        ),
        "frequency": InputMeta(
            "Transaction Frequency",
            "How often will you need to procure/produce this component?",
            "Help the student think about volume. High frequency combined with high specificity "
            "often favors making in-house to amortize governance costs.",
        ),
    },
    FrameworkId.HOLD_UP_RISK: {
        "switchingCosts": InputMeta(
            "Switching Costs",
            "How costly would it be to switch suppliers or partners once committed?",
            "Help the student consider sunk investments, integration costs and relationship "
            "knowledge that would be lost when changing partners.",
        ),
        "relationshipSpecificity": InputMeta(
            "Relationship Specificity",
            "How much would your partner need to invest specifically for your relationship?",
            "Help the student think about dedicated equipment, personnel or facilities that only "
            "benefit this relationship and create mutual dependency.",
        ),
        "informationAsymmetry": InputMeta(
            "Information Asymmetry",
            "How much more does the potential partner know about costs and technology than you?",
            "Help the student assess knowledge gaps the partner could exploit in negotiations "
            "and how claims could be verified.",
        ),
    },
    FrameworkId.BARGAINING: {
        "supplierPower": InputMeta(
            "Supplier Power",
            "How much leverage do potential suppliers/partners have?",
            "Help the student assess supplier concentration and differentiation, and whether "
            "they would be an important customer.",
        ),
        "buyerAlternatives": InputMeta(
            "Your Alternatives",
            "How many viable alternatives do you have for sourcing this capability?",
            "Help the student think about negotiating leverage and their best alternative to a "
            "negotiated agreement (BATNA).",
        ),
        "urgency": InputMeta(
            "Time Pressure",
            "How urgent is the need to secure this capability?",
            "Help the student consider how urgency shifts power to the supplier and what delay "
            "would cost.",
        ),
    },
    FrameworkId.ADDITIONAL: {
        "timeHorizon": InputMeta(
            "Strategic Time Horizon",
            "What is your strategic planning timeframe for this decision?",
            "Help the student weigh urgency against long-term importance. Short horizons favor "
            "speed; long horizons make internal capabilities more valuable.",
        ),
        "capabilityGap": InputMeta(
            "Capability Gap",
            "How large is the gap between your current capabilities and what is needed?",
            "Help the student honestly assess missing skills, equipment and resources and how "
            "long they would take to build.",
        ),
        "optionality": InputMeta(
            "Strategic Optionality",
            "How valuable is it to maintain flexibility and multiple options?",
            "Help the student think about what each choice would foreclose and how hard a later "
            "pivot would be.",
        ),
    },
}


def describe_inputs(framework: FrameworkId) -> str:
    """Bullet list of a framework's inputs for the input-hints prompt."""
    return "\n".join(
        f'- {input_id}: "{meta.label}" - {meta.description}\n  Guidance: {meta.hint_guidance}'
        for input_id, meta in INPUT_METADATA[framework].items()
    )


EXAMPLE_SCENARIO = Scenario(
    id="rivian-batteries",
    title="Rivian Battery Strategy",
    summary=(
        "Rivian, a well-funded EV startup, faces a pivotal decision on its battery strategy. "
        "Should they invest heavily to develop battery manufacturing in-house (like Tesla), "
        "continue purchasing cells from established suppliers like Samsung SDI and LG Chem, "
        "or form a strategic joint venture to share costs and expertise? With batteries "
        "representing 30-40% of vehicle cost and defining competitive differentiation, what "
        "approach should Rivian take?"
    ),
    context=(
        "Rivian is a well-funded EV startup competing against Tesla and legacy automakers "
        "entering the electric vehicle market. Batteries represent 30-40% of vehicle cost and "
        "are critical for performance differentiation. The company has limited manufacturing "
        "experience but strong engineering talent and significant capital from Amazon and Ford."
    ),
    key_factors=[
        "Batteries are the most expensive and strategically important EV component",
        "Battery technology is rapidly evolving (lithium-ion approaching limits, solid-state emerging)",
        "Limited supplier options with long lead times and capacity constraints",
        "Tesla has demonstrated advantages from vertical integration",
        "Rivian needs to scale production quickly to meet demand",
        "Capital constraints despite significant funding",
    ],
    stakeholders=[
        "Rivian engineering and manufacturing teams",
        "Investors (Amazon, Ford)",
        "Potential battery suppliers (Samsung SDI, LG Chem, Panasonic)",
        "Customers expecting competitive range and performance",
    ],
    constraints=[
        "Time pressure to scale production",
        "Capital allocation decisions",
        "Limited in-house battery manufacturing expertise",
        "Need for customized battery specs for adventure vehicles",
    ],
    raw_input="Rivian case study - battery strategy decision",
    source_type="example",
)
