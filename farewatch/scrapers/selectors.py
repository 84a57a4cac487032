"""
Selector cascades for the Ryanair flight selection page.

Strategy hierarchy per field:
0. Test attributes (data-e2e / data-ref), most reliable
1. BEM class names used by the current site build
2. Generic substring-matched class names, last resort

The site ships layout experiments regularly, so every field keeps several
generations of markup side by side.
"""

from farewatch.scrapers.cascade import SelectorStrategy as S

# =============================================================================
# Date strip
# =============================================================================

DATE_ITEM = (
    S("e2e-date-item", "[data-e2e='date-item']", 0),
    S("class-date-item", ".date-item", 1),
)

DATE_LABEL = (
    S("class-day-month", ".date-item__day-month", 1),
)

DATE_DAY_OF_MONTH = (
    S("class-day-of-month", ".date-item__day-of-month", 1),
)

DATE_MONTH = (
    S("class-month", ".date-item__month", 1),
)

DATE_WEEKDAY = (
    S("class-day-of-week", ".date-item__day-of-week", 1),
    S("class-day", ".date-item__day", 1),
)

DATE_PRICE = (
    S("e2e-date-price", "[data-e2e='date-item-price']", 0),
    S("class-date-price", ".date-item__price", 1),
)

# Structural selected state: class membership, never text
SELECTED_DATE_CLASSES = ("date-item--selected",)

# =============================================================================
# Flight cards
# =============================================================================

FLIGHT_CARD = (
    S("e2e-flight-card", "[data-e2e='flight-card']", 0),
    S("ref-flight-card", "[data-ref='flight-card']", 0),
    S("class-flight-card", ".flight-card", 1),
    S("class-flight-card-wrapper", ".flight-card__wrapper", 1),
    S("class-flights-card", ".flights-card", 1),
    S("class-journey-container", ".journey-container", 2),
    S("class-flights-table-row", ".flights-table__row", 2),
    S("class-card", ".card", 2),
)

DEPARTURE_TIME = (
    S("e2e-departure-time", "[data-e2e='flight-card-departure-time']", 0),
    S("class-departure-time", ".flight-card__departure-time", 1),
)

ARRIVAL_TIME = (
    S("e2e-arrival-time", "[data-e2e='flight-card-arrival-time']", 0),
    S("class-arrival-time", ".flight-card__arrival-time", 1),
)

# Paired departure/arrival nodes, in document order
PAIRED_TIMES = (
    S("class-flight-card-time", ".flight-card__time", 1),
    S("class-time", ".time", 2),
    S("class-hour", ".hour", 2),
    S("class-contains-hour", "[class*='hour']", 2),
    S("class-contains-time", "[class*='time']", 2),
)

FLIGHT_NUMBER = (
    S("e2e-flight-number", "[data-e2e='flight-card-flight-number']", 0),
    S("class-card-flight-number", ".flight-card__flight-number", 1),
    S("class-flight-number", ".flight-number", 2),
    S("class-contains-flight-number", "[class*='flight-number']", 2),
)

CARD_PRICE = (
    S("e2e-price", "[data-e2e='flight-card-price']", 0),
    S("class-card-price", ".flight-card__price", 1),
    S("class-summary-price", ".flight-card-summary__price", 1),
    S("class-price", ".price", 2),
    S("class-contains-price", "[class*='price']", 2),
    S("class-fare", ".fare", 2),
    S("class-contains-fare", "[class*='fare']", 2),
    S("class-amount", ".amount", 2),
    S("class-contains-amount", "[class*='amount']", 2),
)

CARD_CURRENCY = (
    S("class-price-currency", ".price__currency", 1),
)

DURATION = (
    S("e2e-duration", "[data-e2e='flight-card-duration']", 0),
    S("class-duration", ".flight-card__duration", 1),
    S("class-contains-duration", "[class*='duration']", 2),
)

# =============================================================================
# Heuristic card detection (used when FLIGHT_CARD matches nothing)
# =============================================================================

HEURISTIC_CANDIDATES = "[class]"
HEURISTIC_CLASS_TOKENS = ("flight", "card", "journey")

TIME_LIKE = (
    S("class-time", ".time", 2),
    S("class-contains-time", "[class*='time']", 2),
    S("class-hour", ".hour", 2),
    S("class-contains-hour", "[class*='hour']", 2),
)

PRICE_LIKE = (
    S("class-price", ".price", 2),
    S("class-contains-price", "[class*='price']", 2),
    S("class-fare", ".fare", 2),
    S("class-contains-fare", "[class*='fare']", 2),
    S("class-amount", ".amount", 2),
    S("class-contains-amount", "[class*='amount']", 2),
)

# =============================================================================
# Page-level time slots (distinct from flight cards)
# =============================================================================

TIME_SLOT = (
    S("e2e-time-slot", "[data-e2e='time-slot']", 0),
    S("class-time-slot", ".time-slot", 1),
    S("class-contains-time-slot", "[class*='time-slot']", 2),
)

SLOT_DEPARTURE_TIME = (
    S("class-slot-departure", ".time-slot__departure", 1),
    S("class-slot-time", ".time-slot__time", 1),
)

SLOT_ARRIVAL_TIME = (
    S("class-slot-arrival", ".time-slot__arrival", 1),
)

SLOT_PRICE = (
    S("class-slot-price", ".time-slot__price", 1),
    S("class-contains-price", "[class*='price']", 2),
)

# =============================================================================
# Page-level summary (last resort)
# =============================================================================

SUMMARY_ROUTE = (
    S("class-flight-header-route", ".flight-header__route", 1),
    S("class-trip-header-route", ".trip-header__route", 1),
    S("class-flight-header-title", ".flight-header__title", 1),
)

SUMMARY_DATE = (
    S("class-flight-header-date", ".flight-header__date", 1),
    S("class-trip-header-date", ".trip-header__date", 1),
)

SUMMARY_PASSENGERS = (
    S("class-passenger-number", ".flight-header__passenger-number", 1),
    S("class-trip-header-passengers", ".trip-header__passengers", 1),
)

SUMMARY_MIN_PRICE = (
    S("class-flight-header-min-price", ".flight-header__min-price", 1),
    S("class-trip-header-price", ".trip-header__price", 1),
    S("class-price-total", ".price-total", 2),
)

# =============================================================================
# Page readiness (orchestration waits for any of these)
# =============================================================================

READY_SELECTORS = [
    ".date-item__price",
    "[data-e2e='flight-card']",
    ".flight-card",
    ".flight-card__wrapper",
]

COOKIE_ACCEPT = "button[data-ref='cookie.accept-all']"
