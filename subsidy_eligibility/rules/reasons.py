"""Human-readable ineligibility reasons."""
from typing import List

from subsidy_eligibility.models import EligibilityFlags

# Reason codes, in the order they are reported
CONSUMPTION_CLASS = "CONSUMPTION_CLASS"
TARIFF_MODALITY = "TARIFF_MODALITY"
AVERAGE_CONSUMPTION = "AVERAGE_CONSUMPTION"

REASON_TEXT = {
    CONSUMPTION_CLASS: "Classe de consumo não aceita",
    TARIFF_MODALITY: "Modalidade tarifária não aceita",
    AVERAGE_CONSUMPTION: "Consumo médio não aceito",
}


def format_reason_code(code: str) -> str:
    """
    Format a reason code into human-readable text.

    Args:
        code: Reason code (e.g., "CONSUMPTION_CLASS")

    Returns:
        Reason text, or the code itself when unknown
    """
    return REASON_TEXT.get(code, code)


def reason_codes(flags: EligibilityFlags) -> List[str]:
    """
    List the codes of the failed criteria.

    Order is fixed (class, tariff, consumption); downstream consumers match on
    position.
    """
    codes = []

    if not flags.class_eligible:
        codes.append(CONSUMPTION_CLASS)
    if not flags.tariff_eligible:
        codes.append(TARIFF_MODALITY)
    if not flags.consumption_eligible:
        codes.append(AVERAGE_CONSUMPTION)

    return codes


def compose_reasons(flags: EligibilityFlags) -> List[str]:
    """
    Compose the ineligibility reasons for a set of criteria outcomes.

    Args:
        flags: Outcome of each criterion

    Returns:
        One reason string per failed criterion, empty when all passed
    """
    return [format_reason_code(code) for code in reason_codes(flags)]
