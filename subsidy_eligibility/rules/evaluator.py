"""Subsidy eligibility evaluation."""
import logging
from typing import Sequence

from subsidy_eligibility.models import (
    ConnectionType,
    ConsumptionClass,
    CustomerProfile,
    EligibilityFlags,
    EligibilityReport,
    TariffModality,
)
from subsidy_eligibility.rules.criteria import (
    AVERAGING_MONTHS,
    CO2_KG_PER_MWH,
    ELIGIBLE_CONSUMPTION_CLASSES,
    ELIGIBLE_TARIFF_MODALITIES,
    KWH_PER_MWH,
    MIN_AVERAGE_CONSUMPTION_KWH,
)
from subsidy_eligibility.rules.reasons import compose_reasons

logger = logging.getLogger(__name__)


def average_consumption(history: Sequence[float]) -> float:
    """
    Average monthly consumption in kWh.

    The divisor is always AVERAGING_MONTHS, so a history shorter than a year
    yields a proportionally lower average.
    """
    return sum(history) / AVERAGING_MONTHS


def is_consumption_class_eligible(consumption_class: ConsumptionClass) -> bool:
    return consumption_class in ELIGIBLE_CONSUMPTION_CLASSES


def is_tariff_modality_eligible(tariff_modality: TariffModality) -> bool:
    return tariff_modality in ELIGIBLE_TARIFF_MODALITIES


def is_average_consumption_eligible(connection_type: ConnectionType, history: Sequence[float]) -> bool:
    """
    Check the average consumption against the connection type threshold.

    Args:
        connection_type: Customer connection type
        history: Monthly readings in kWh

    Returns:
        True if the average is strictly above the threshold, False otherwise
        (including for unrecognized connection types)
    """
    threshold = MIN_AVERAGE_CONSUMPTION_KWH.get(connection_type)
    if threshold is None:
        return False

    return average_consumption(history) > threshold


def check_criteria(profile: CustomerProfile) -> EligibilityFlags:
    """Evaluate the three criteria independently."""
    return EligibilityFlags(
        class_eligible=is_consumption_class_eligible(profile.consumption_class),
        tariff_eligible=is_tariff_modality_eligible(profile.tariff_modality),
        consumption_eligible=is_average_consumption_eligible(
            profile.connection_type, profile.consumption_history
        ),
    )


def project_annual_co2_savings(history: Sequence[float]) -> float:
    """
    Project the CO2 avoided per year by joining the program.

    Args:
        history: Monthly readings in kWh

    Returns:
        Kilograms of CO2, unrounded. The readings are summed as given, with no
        annualization of partial histories.
    """
    annual_consumption = sum(history)
    return (annual_consumption / KWH_PER_MWH) * CO2_KG_PER_MWH


def evaluate(profile: CustomerProfile) -> EligibilityReport:
    """
    Decide eligibility for one customer.

    Args:
        profile: Customer profile

    Returns:
        EligibilityReport with the CO2 savings projection when eligible, or the
        reasons for rejection otherwise
    """
    flags = check_criteria(profile)
    logger.debug(
        f"Criteria for {profile.document_number}: class={flags.class_eligible} "
        f"tariff={flags.tariff_eligible} consumption={flags.consumption_eligible}"
    )

    if flags.all_passed:
        report = EligibilityReport(
            eligible=True,
            annual_co2_savings=project_annual_co2_savings(profile.consumption_history),
        )
        logger.info(f"Customer {profile.document_number} eligible: {report.annual_co2_savings:.2f} kg CO2/year")
    else:
        report = EligibilityReport(
            eligible=False,
            ineligibility_reasons=compose_reasons(flags),
        )
        logger.info(f"Customer {profile.document_number} ineligible: {len(report.ineligibility_reasons)} reason(s)")

    return report
