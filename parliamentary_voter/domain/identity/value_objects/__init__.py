from .province import JurisdictionType, Province

__all__ = [
    "JurisdictionType",
    "Province",
]
