"""Ryanair results page URL construction."""

from urllib.parse import urlencode

from farewatch.schemas.fare import FareQuery


def build_ryanair_url(
    query: FareQuery,
    base_url: str = "https://www.ryanair.com",
    market: str = "gb/en",
) -> str:
    """
    Build the direct one-way flight selection URL for a query.

    This is the SINGLE source of truth for results URL construction. The
    site expects the search parameters twice: once plainly and once with a
    ``tp`` prefix used by its trip planner state.
    """
    party = query.party
    date_out = query.departure_date.strftime("%Y-%m-%d")

    params = [
        ("adults", party.adults),
        ("teens", party.teens),
        ("children", party.children),
        ("infants", party.infants),
        ("dateOut", date_out),
        ("dateIn", ""),
        ("isConnectedFlight", "false"),
        ("discount", 0),
        ("promoCode", ""),
        ("isReturn", "false"),
        ("originIata", query.origin),
        ("destinationIata", query.destination),
        ("tpAdults", party.adults),
        ("tpTeens", party.teens),
        ("tpChildren", party.children),
        ("tpInfants", party.infants),
        ("tpStartDate", date_out),
        ("tpEndDate", ""),
        ("tpDiscount", 0),
        ("tpPromoCode", ""),
        ("tpOriginIata", query.origin),
        ("tpDestinationIata", query.destination),
    ]

    base = f"{base_url.rstrip('/')}/{market.strip('/')}/trip/flights/select"
    return f"{base}?{urlencode(params)}"
