"""Unit tests for the eligibility criteria and reason composition."""
import pytest

from subsidy_eligibility.models import (
    ConnectionType,
    ConsumptionClass,
    EligibilityFlags,
    TariffModality,
)
from subsidy_eligibility.rules.criteria import (
    ELIGIBLE_CONSUMPTION_CLASSES,
    ELIGIBLE_TARIFF_MODALITIES,
    MIN_AVERAGE_CONSUMPTION_KWH,
)
from subsidy_eligibility.rules.evaluator import (
    average_consumption,
    is_average_consumption_eligible,
    is_consumption_class_eligible,
    is_tariff_modality_eligible,
    project_annual_co2_savings,
)
from subsidy_eligibility.rules.reasons import (
    AVERAGE_CONSUMPTION,
    CONSUMPTION_CLASS,
    TARIFF_MODALITY,
    compose_reasons,
    format_reason_code,
    reason_codes,
)


class TestConsumptionClass:
    """Test consumption class criterion."""

    def test_eligible_classes(self):
        """Test that commercial, residential and industrial pass."""
        assert is_consumption_class_eligible(ConsumptionClass.COMMERCIAL) is True
        assert is_consumption_class_eligible(ConsumptionClass.RESIDENTIAL) is True
        assert is_consumption_class_eligible(ConsumptionClass.INDUSTRIAL) is True

    def test_ineligible_classes(self):
        """Test that public sector, rural and unknown classes fail."""
        assert is_consumption_class_eligible(ConsumptionClass.PUBLIC_SECTOR) is False
        assert is_consumption_class_eligible(ConsumptionClass.RURAL) is False
        assert is_consumption_class_eligible(ConsumptionClass.UNRECOGNIZED) is False

    def test_every_member_classified(self):
        """Test each member against the eligible set deterministically."""
        for member in ConsumptionClass:
            expected = member in ELIGIBLE_CONSUMPTION_CLASSES
            assert is_consumption_class_eligible(member) is expected, f"{member} misclassified"


class TestTariffModality:
    """Test tariff modality criterion."""

    def test_eligible_modalities(self):
        assert is_tariff_modality_eligible(TariffModality.CONVENTIONAL) is True
        assert is_tariff_modality_eligible(TariffModality.WHITE) is True

    def test_ineligible_modalities(self):
        assert is_tariff_modality_eligible(TariffModality.BLUE) is False
        assert is_tariff_modality_eligible(TariffModality.GREEN) is False
        assert is_tariff_modality_eligible(TariffModality.UNRECOGNIZED) is False

    def test_eligible_set(self):
        assert ELIGIBLE_TARIFF_MODALITIES == {TariffModality.CONVENTIONAL, TariffModality.WHITE}


class TestAverageConsumption:
    """Test average consumption criterion and thresholds."""

    def test_fixed_divisor(self):
        """Test that the average always divides by 12."""
        assert average_consumption([1200]) == 100
        assert average_consumption([500] * 12) == 500
        assert average_consumption([]) == 0

    def test_partial_history_lowers_average(self):
        """Ten readings are still divided by 12, not by 10."""
        history = [600] * 10
        assert average_consumption(history) == 500
        assert average_consumption(history) != sum(history) / len(history)

    @pytest.mark.parametrize("connection_type, threshold", [
        (ConnectionType.SINGLE_PHASE, 400),
        (ConnectionType.TWO_PHASE, 500),
        (ConnectionType.THREE_PHASE, 750),
    ])
    def test_thresholds(self, connection_type, threshold):
        """Test strict greater-than at each threshold."""
        assert MIN_AVERAGE_CONSUMPTION_KWH[connection_type] == threshold
        assert is_average_consumption_eligible(connection_type, [threshold + 1] * 12) is True
        assert is_average_consumption_eligible(connection_type, [threshold] * 12) is False
        assert is_average_consumption_eligible(connection_type, [threshold - 1] * 12) is False

    def test_unrecognized_connection_never_eligible(self):
        """Test unknown connection types fail regardless of consumption."""
        assert is_average_consumption_eligible(ConnectionType.UNRECOGNIZED, [100000] * 12) is False
        assert is_average_consumption_eligible(ConnectionType.UNRECOGNIZED, []) is False


class TestSavingsProjection:
    """Test CO2 savings projection."""

    def test_full_year(self):
        assert project_annual_co2_savings([500] * 12) == pytest.approx(504.0)

    def test_partial_history_not_annualized(self):
        """Ten readings are summed as given."""
        history = [3878, 9760, 5976, 2797, 2481, 5731, 7538, 4392, 7859, 4160]
        assert project_annual_co2_savings(history) == pytest.approx(54572 / 1000 * 84)

    def test_not_rounded(self):
        assert project_annual_co2_savings([1]) == pytest.approx(0.084)


class TestReasons:
    """Test ineligibility reason composition."""

    def test_reason_text(self):
        """Test the fixed literal strings."""
        assert format_reason_code(CONSUMPTION_CLASS) == "Classe de consumo não aceita"
        assert format_reason_code(TARIFF_MODALITY) == "Modalidade tarifária não aceita"
        assert format_reason_code(AVERAGE_CONSUMPTION) == "Consumo médio não aceito"

    def test_unknown_code_passthrough(self):
        assert format_reason_code("OTHER") == "OTHER"

    def test_all_failed_order(self):
        flags = EligibilityFlags(class_eligible=False, tariff_eligible=False, consumption_eligible=False)
        assert reason_codes(flags) == [CONSUMPTION_CLASS, TARIFF_MODALITY, AVERAGE_CONSUMPTION]

    def test_single_failure(self):
        flags = EligibilityFlags(class_eligible=True, tariff_eligible=False, consumption_eligible=True)
        assert compose_reasons(flags) == ["Modalidade tarifária não aceita"]

    def test_none_failed(self):
        flags = EligibilityFlags(class_eligible=True, tariff_eligible=True, consumption_eligible=True)
        assert compose_reasons(flags) == []
        assert flags.all_passed is True
