"""Request payload builders shared by the test modules."""
from decision_lab.models import FrameworkAnswers


def framework_payload(**overrides) -> dict:
    """Camel-case framework answers, none completed unless overridden."""
    payload = {
        "competition": {"performancePressure": 3, "costPressure": 3, "completed": False},
        "technology": {"currentPhase": "mature", "emergingThreat": False, "completed": False},
        "transactionCost": {"assetSpecificity": 3, "uncertainty": 3, "frequency": 3, "completed": False},
        "holdUpRisk": {
            "switchingCosts": 3,
            "relationshipSpecificity": 3,
            "informationAsymmetry": 3,
            "completed": False,
        },
        "bargaining": {"supplierPower": 3, "buyerAlternatives": 3, "urgency": 3, "completed": False},
        "additional": {"timeHorizon": "medium", "capabilityGap": 3, "optionality": 3, "completed": False},
    }
    for key, values in overrides.items():
        payload[key] = {**payload[key], "completed": True, **values}
    return payload


def make_answers(**overrides) -> FrameworkAnswers:
    return FrameworkAnswers.model_validate(framework_payload(**overrides))
