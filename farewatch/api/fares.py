from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError
import logging

from farewatch.schemas.fare import (
    FareSearchRequest,
    FareSearchResponse,
    date_fare_point_response,
    offer_response,
)
from farewatch.scrapers.reconciler import select_cheapest
from farewatch.scrapers.ryanair import RyanairScraper

logger = logging.getLogger(__name__)

router = APIRouter()


def get_scraper() -> RyanairScraper:
    return RyanairScraper()


@router.post("/api/fares", response_model=FareSearchResponse)
async def search_fares(
    request: FareSearchRequest,
    scraper: RyanairScraper = Depends(get_scraper),
):
    """Scrape fares for one route and date, returning offers and nearby date prices."""
    try:
        query = request.to_query()
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=[{"loc": list(err["loc"]), "msg": err["msg"]} for err in e.errors()],
        )

    result = await scraper.scrape_fares(query)
    if not result.is_success:
        logger.warning(f"Fare search {query.display_name} ended with {result.status}")

    cheapest = select_cheapest(result.fares.offers)

    return FareSearchResponse(
        status=result.status,
        query=query,
        offers=[offer_response(offer) for offer in result.fares.offers],
        nearby_dates=[date_fare_point_response(point) for point in result.fares.nearby_dates],
        cheapest=offer_response(cheapest) if cheapest else None,
        warnings=list(result.fares.warnings),
        error_message=result.error_message,
        duration_ms=result.duration_ms,
    )
