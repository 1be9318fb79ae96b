"""
Listing filters - turns filter values into SQL predicates and order clauses.

Kept free of I/O so each rule can be checked without a database. Attributes
that live behind many-to-many links (an agency's services, industries and
technologies) are not turned into predicates here; `post_filter_by_terms`
applies them to rows already fetched.
"""
from datetime import date, timedelta
from typing import Iterable, List, Optional, Protocol, Sequence, Tuple, TypeVar

from sqlalchemy import and_, not_, or_
from sqlalchemy.sql.elements import ColumnElement

from app.models.agency import Agency
from app.models.event import Event, LOCATION_TYPE_VIRTUAL
from app.schemas.agency import AgencyFilters
from app.schemas.event import EventFilters


# ── Agencies ─────────────────────────────────────────────────────────────────

# Directory location labels -> substring searched in city/country
AGENCY_LOCATION_PATTERNS = {
    "United States": "USA",
    "United Kingdom": "UK",
    "Europe": "Europe",
    "Asia": "Asia",
}

AGENCY_ORDERINGS = {
    "rating-desc": (Agency.rating_avg.desc().nulls_last(), Agency.name.asc()),
    "rating-asc": (Agency.rating_avg.asc().nulls_first(), Agency.name.asc()),
    "name-asc": (Agency.name.asc(),),
    "name-desc": (Agency.name.desc(),),
}
DEFAULT_AGENCY_SORT = "rating-desc"


def _contains(value: str) -> str:
    return f"%{value}%"


def agency_location_condition(location: str) -> ColumnElement[bool]:
    """City or country containing the pattern for a directory location label."""
    if location == "Remote":
        pattern = "Remote"
    else:
        pattern = AGENCY_LOCATION_PATTERNS.get(location, location)
    return or_(
        Agency.location_country.ilike(_contains(pattern)),
        Agency.location_city.ilike(_contains(pattern)),
    )


def agency_conditions(filters: AgencyFilters) -> List[ColumnElement[bool]]:
    """Predicates for the filters that map onto agency columns."""
    conditions: List[ColumnElement[bool]] = []

    if filters.search:
        conditions.append(Agency.name.ilike(_contains(filters.search)))

    if filters.location:
        conditions.append(agency_location_condition(filters.location))

    if filters.rating is not None:
        conditions.append(Agency.rating_avg >= filters.rating)

    if filters.size:
        conditions.append(Agency.employee_range == filters.size)

    return conditions


def agency_order_by(sort: Optional[str]) -> Tuple:
    """Order clauses for a sort key; unknown keys fall back to highest rated first."""
    return AGENCY_ORDERINGS.get(sort or DEFAULT_AGENCY_SORT, AGENCY_ORDERINGS[DEFAULT_AGENCY_SORT])


class _HasTermNames(Protocol):
    services: Sequence[str]
    industries: Sequence[str]
    technologies: Sequence[str]


CardT = TypeVar("CardT", bound=_HasTermNames)


def post_filter_by_terms(cards: Iterable[CardT], filters: AgencyFilters) -> List[CardT]:
    """
    Keep cards whose service / industry / technology names contain the
    selected value exactly. Unset filters keep everything.
    """
    kept = list(cards)
    if filters.service:
        kept = [card for card in kept if filters.service in card.services]
    if filters.industry:
        kept = [card for card in kept if filters.industry in card.industries]
    if filters.technology:
        kept = [card for card in kept if filters.technology in card.technologies]
    return kept


# ── Events ───────────────────────────────────────────────────────────────────

# Events page location values -> substring searched in location_label
EVENT_LOCATION_PATTERNS = {
    "united states": "USA",
    "europe": "Europe",
    "asia": "Asia",
}

# Labels that mean an event is *not* in the "other" bucket
KNOWN_EVENT_LOCATIONS = ["USA", "United States", "Europe", "Asia", "UK", "London"]


def event_date_window(date_range: str, today: date) -> Optional[Tuple[date, date]]:
    """
    First and last calendar day (inclusive) for a relative date range.

    Weeks run Sunday through Saturday. Returns None for 'all' or unknown values.
    """
    if date_range == "today":
        return today, today

    if date_range == "this-week":
        # date.weekday(): Monday=0 ... Sunday=6
        week_start = today - timedelta(days=(today.weekday() + 1) % 7)
        return week_start, week_start + timedelta(days=6)

    if date_range == "this-month":
        month_start = today.replace(day=1)
        return month_start, _next_month_start(month_start) - timedelta(days=1)

    if date_range == "next-month":
        next_start = _next_month_start(today.replace(day=1))
        return next_start, _next_month_start(next_start) - timedelta(days=1)

    return None


def _next_month_start(month_start: date) -> date:
    if month_start.month == 12:
        return month_start.replace(year=month_start.year + 1, month=1)
    return month_start.replace(month=month_start.month + 1)


def event_location_condition(location: str) -> Optional[ColumnElement[bool]]:
    """Predicate for an events page location value, or None for no filter."""
    location = location.lower()

    if location == "virtual":
        return Event.location_type == LOCATION_TYPE_VIRTUAL

    pattern = EVENT_LOCATION_PATTERNS.get(location)
    if pattern:
        return Event.location_label.ilike(_contains(pattern))

    if location == "other":
        return and_(
            Event.location_type != LOCATION_TYPE_VIRTUAL,
            *[
                not_(Event.location_label.ilike(_contains(known)))
                for known in KNOWN_EVENT_LOCATIONS
            ],
        )

    return None


def event_conditions(filters: EventFilters, today: date) -> List[ColumnElement[bool]]:
    """Predicates for the events page filters."""
    conditions: List[ColumnElement[bool]] = []

    if filters.event_type and filters.event_type != "all":
        conditions.append(Event.event_type == filters.event_type)

    if filters.location and filters.location != "all":
        location = event_location_condition(filters.location)
        if location is not None:
            conditions.append(location)

    window = event_date_window(filters.date_range, today)
    if window:
        first_day, last_day = window
        conditions.append(Event.start_at >= first_day)
        conditions.append(Event.start_at < last_day + timedelta(days=1))

    if filters.price != "all":
        conditions.append(Event.price_type == filters.price)

    if filters.search:
        conditions.append(Event.title.ilike(_contains(filters.search)))

    return conditions
