"""Eligibility criteria and constants."""
from typing import Dict, FrozenSet

from subsidy_eligibility.models import ConnectionType, ConsumptionClass, TariffModality

# Consumption classes accepted by the program (public sector and rural are not)
ELIGIBLE_CONSUMPTION_CLASSES: FrozenSet[ConsumptionClass] = frozenset({
    ConsumptionClass.COMMERCIAL,
    ConsumptionClass.RESIDENTIAL,
    ConsumptionClass.INDUSTRIAL,
})

# Tariff modalities accepted by the program (blue and green are not)
ELIGIBLE_TARIFF_MODALITIES: FrozenSet[TariffModality] = frozenset({
    TariffModality.CONVENTIONAL,
    TariffModality.WHITE,
})

# Minimum average monthly consumption by connection type, in kWh.
# The average must be strictly above the threshold.
MIN_AVERAGE_CONSUMPTION_KWH: Dict[ConnectionType, int] = {
    ConnectionType.SINGLE_PHASE: 400,
    ConnectionType.TWO_PHASE: 500,
    ConnectionType.THREE_PHASE: 750,
}

# Average divisor, fixed regardless of how many readings the history holds
AVERAGING_MONTHS = 12

# Brazilian grid emission factor: 84 kg CO2 per 1000 kWh generated
CO2_KG_PER_MWH = 84
KWH_PER_MWH = 1000
