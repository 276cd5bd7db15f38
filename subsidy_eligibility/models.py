"""Input and output models for eligibility evaluation."""
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)


class InvalidProfileError(ValueError):
    """Raised when a customer payload is malformed (missing or mistyped fields)."""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []


class _TokenEnum(str, Enum):
    """String enum whose unknown tokens map to UNRECOGNIZED instead of failing."""

    @classmethod
    def _missing_(cls, value):
        return cls.UNRECOGNIZED


class ConnectionType(_TokenEnum):
    SINGLE_PHASE = "monofasico"
    TWO_PHASE = "bifasico"
    THREE_PHASE = "trifasico"
    UNRECOGNIZED = "__unrecognized__"


class ConsumptionClass(_TokenEnum):
    COMMERCIAL = "comercial"
    RESIDENTIAL = "residencial"
    INDUSTRIAL = "industrial"
    PUBLIC_SECTOR = "poderPublico"
    RURAL = "rural"
    UNRECOGNIZED = "__unrecognized__"


class TariffModality(_TokenEnum):
    WHITE = "branca"
    BLUE = "azul"
    GREEN = "verde"
    CONVENTIONAL = "convencional"
    UNRECOGNIZED = "__unrecognized__"


_CATEGORICAL_FIELDS = {
    "connection_type": ConnectionType,
    "consumption_class": ConsumptionClass,
    "tariff_modality": TariffModality,
}


class CustomerProfile(BaseModel):
    """
    Contract attributes and consumption history of one customer.

    Accepts either the wire keys (numeroDoDocumento, tipoDeConexao, ...) or
    the field names. Categorical values are matched case-sensitively; anything
    else becomes the UNRECOGNIZED member of its enum.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    document_number: str = Field(alias="numeroDoDocumento")
    connection_type: ConnectionType = Field(alias="tipoDeConexao")
    consumption_class: ConsumptionClass = Field(alias="classeDeConsumo")
    tariff_modality: TariffModality = Field(alias="modalidadeTarifaria")
    # Most recent month first
    consumption_history: Tuple[float, ...] = Field(alias="historicoDeConsumo")

    @field_validator("connection_type", "consumption_class", "tariff_modality", mode="before")
    @classmethod
    def _coerce_token(cls, value, info: ValidationInfo):
        expected = _CATEGORICAL_FIELDS[info.field_name]
        if isinstance(value, expected):
            return value
        if isinstance(value, Enum):
            raise ValueError(f"expected a {expected.__name__}, got {type(value).__name__}")
        if not isinstance(value, str):
            raise ValueError("categorical value must be a string")
        return expected(value)

    @field_validator("consumption_history", mode="before")
    @classmethod
    def _require_sequence(cls, value):
        if isinstance(value, (str, bytes, dict)) or not hasattr(value, "__iter__"):
            raise ValueError("consumption history must be a list of numbers")
        readings = list(value)
        for reading in readings:
            # bool is an int subclass but never a valid reading
            if isinstance(reading, bool) or not isinstance(reading, (int, float)):
                raise ValueError(f"non-numeric consumption reading: {reading!r}")
        return tuple(readings)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "CustomerProfile":
        """
        Build a profile from a decoded JSON payload.

        Args:
            payload: Dict with wire keys or field names

        Returns:
            CustomerProfile

        Raises:
            InvalidProfileError: If the payload is not a dict or fails validation
        """
        if not isinstance(payload, dict):
            raise InvalidProfileError(f"Profile payload must be an object, got {type(payload).__name__}")
        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            raise InvalidProfileError(f"Invalid customer profile: {e}", errors=e.errors()) from e


class EligibilityFlags(BaseModel):
    """Outcome of each of the three eligibility criteria."""

    model_config = ConfigDict(frozen=True)

    class_eligible: bool
    tariff_eligible: bool
    consumption_eligible: bool

    @property
    def all_passed(self) -> bool:
        return self.class_eligible and self.tariff_eligible and self.consumption_eligible


class EligibilityReport(BaseModel):
    """Verdict for one customer: savings when eligible, reasons otherwise."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    eligible: bool = Field(alias="elegivel")
    annual_co2_savings: Optional[float] = Field(default=None, alias="economiaAnualDeCO2")
    ineligibility_reasons: Optional[List[str]] = Field(default=None, alias="razoesInelegibilidade")

    def to_dict(self) -> Dict[str, Any]:
        """Render with wire keys, leaving out whichever optional field is absent."""
        return self.model_dump(by_alias=True, exclude_none=True)

    @model_validator(mode="after")
    def _check_consistency(self):
        if self.eligible:
            if self.annual_co2_savings is None or self.ineligibility_reasons is not None:
                raise ValueError("eligible report needs savings and no reasons")
        elif self.ineligibility_reasons is None or self.annual_co2_savings is not None:
            raise ValueError("ineligible report needs reasons and no savings")
        return self
