from farewatch.schemas.fare import (
    FareQuery,
    FareSearchRequest,
    FareSearchResponse,
    PartyComposition,
)

__all__ = ["FareQuery", "FareSearchRequest", "FareSearchResponse", "PartyComposition"]
