"""
Province value object.

Canadian provinces and territories are reference data: the catalog below is
the complete set, and ``Province.create`` only ever hands out members of it.
"""

from dataclasses import dataclass
from enum import StrEnum

from parliamentary_voter.domain.common.exceptions import InvalidArgumentError
from parliamentary_voter.domain.common.value_object import ValueObject

CANADA = "Canada"


class JurisdictionType(StrEnum):
    PROVINCE = "Province"
    TERRITORY = "Territory"


@dataclass(frozen=True, eq=False)
class Province(ValueObject):
    """
    A Canadian province or territory.

    Two provinces are equal when they share country and code; the descriptive
    fields (population, capital) are informational only.
    """

    code: str
    name: str
    jurisdiction_type: JurisdictionType
    population: int
    capital: str
    country: str = CANADA

    def __post_init__(self) -> None:
        for field_name in ("code", "name", "capital"):
            if not getattr(self, field_name).strip():
                raise InvalidArgumentError(
                    f"Province {field_name} cannot be empty", field=field_name
                )

    def _equality_components(self) -> tuple[object, ...]:
        return (self.country, self.code)

    @property
    def is_province(self) -> bool:
        return self.jurisdiction_type is JurisdictionType.PROVINCE

    @property
    def is_territory(self) -> bool:
        return self.jurisdiction_type is JurisdictionType.TERRITORY

    def __str__(self) -> str:
        return f"{self.name} ({self.code})"

    @classmethod
    def create(cls, code: str) -> "Province":
        """
        Look up a province or territory by its two-letter code.

        Args:
            code: Postal abbreviation, any case (e.g. "on", "QC")

        Returns:
            The catalog entry for that code

        Raises:
            InvalidArgumentError: If code is blank or not a known code
        """
        if not code or not code.strip():
            raise InvalidArgumentError("Province code cannot be null or empty", field="code")

        normalized = code.strip().upper()
        province = _BY_CODE.get(normalized)
        if province is None:
            raise InvalidArgumentError(
                f"Invalid province code: {normalized}", field="code", value=code
            )
        return province

    @classmethod
    def is_valid_code(cls, code: str | None) -> bool:
        if not code or not code.strip():
            return False
        return code.strip().upper() in _BY_CODE

    @classmethod
    def all(cls) -> tuple["Province", ...]:
        """Return every province and territory, provinces first."""
        return _CANADIAN_PROVINCES

    @classmethod
    def provinces(cls) -> tuple["Province", ...]:
        return tuple(p for p in _CANADIAN_PROVINCES if p.is_province)

    @classmethod
    def territories(cls) -> tuple["Province", ...]:
        return tuple(p for p in _CANADIAN_PROVINCES if p.is_territory)


_CANADIAN_PROVINCES: tuple[Province, ...] = (
    # Provinces
    Province("AB", "Alberta", JurisdictionType.PROVINCE, 4_428_000, "Edmonton"),
    Province("BC", "British Columbia", JurisdictionType.PROVINCE, 5_214_000, "Victoria"),
    Province("MB", "Manitoba", JurisdictionType.PROVINCE, 1_380_000, "Winnipeg"),
    Province("NB", "New Brunswick", JurisdictionType.PROVINCE, 789_000, "Fredericton"),
    Province("NL", "Newfoundland and Labrador", JurisdictionType.PROVINCE, 520_000, "St. John's"),
    Province("NS", "Nova Scotia", JurisdictionType.PROVINCE, 992_000, "Halifax"),
    Province("ON", "Ontario", JurisdictionType.PROVINCE, 15_000_000, "Toronto"),
    Province("PE", "Prince Edward Island", JurisdictionType.PROVINCE, 164_000, "Charlottetown"),
    Province("QC", "Quebec", JurisdictionType.PROVINCE, 8_575_000, "Quebec City"),
    Province("SK", "Saskatchewan", JurisdictionType.PROVINCE, 1_180_000, "Regina"),
    # Territories
    Province("NT", "Northwest Territories", JurisdictionType.TERRITORY, 45_000, "Yellowknife"),
    Province("NU", "Nunavut", JurisdictionType.TERRITORY, 40_000, "Iqaluit"),
    Province("YT", "Yukon", JurisdictionType.TERRITORY, 42_000, "Whitehorse"),
)

_BY_CODE: dict[str, Province] = {p.code: p for p in _CANADIAN_PROVINCES}
