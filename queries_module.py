"""
Queries Module

The catalogue of query types, numbered in registry order:

    1  Entity details (user, flight or reservation)
    2  User history of flights and reservations
    3  Average hotel rating
    4  Hotel reservations
    5  Flights departing an airport in a time range
    6  Busiest airports of a year
    7  Airports with the largest median departure delay
    8  Hotel revenue over a date range
    9  Users whose name starts with a prefix
    10 System statistics per year, month or day

Types that answer many instances from one pass over the database build
their answers in generate_statistics, keyed by the canonical form of
each instance's arguments so identical queries share one answer.
"""

import locale
import sys
import unicodedata
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from database_module import Database
from date_module import (
    date_from_string, date_to_string, date_to_day_number, date_get_year, date_get_month,
    date_get_day, date_and_time_from_string, date_and_time_to_string,
    date_and_time_from_date, date_and_time_get_date,
)
from entity_module import (
    user_is_active, user_calculate_age, reservation_calculate_nights,
    reservation_calculate_price, flight_calculate_delay,
)
from query_module import QueryType, QueryTypeList, QueryInstance
from types_module import (
    parse_uint32, flight_id_from_string, flight_id_to_string, reservation_id_from_string,
    reservation_id_to_string, hotel_id_from_string, hotel_id_to_string,
    airport_code_from_string, airport_code_to_string, country_code_to_string,
    includes_breakfast_to_string,
)
from writer_module import QueryWriter

# Constants
COLLATION_LOCALE = "en_US.UTF-8"
YEAR_DIGITS = 4


def _internal_error(query_type: str, instance: QueryInstance) -> int:
    print(f"{query_type}: statistics missing for line {instance.line_in_file}", file=sys.stderr)
    return 1


# --- Q01: entity details -----------------------------------------------------

class EntityKind(Enum):
    """What kind of entity a Q01 argument names."""
    USER = "user"
    FLIGHT = "flight"
    RESERVATION = "reservation"


@dataclass(frozen=True)
class EntityArguments:
    kind: EntityKind
    user_id: str = ''
    numeric_id: int = 0


def q01_parse_arguments(args: List[str]) -> Optional[EntityArguments]:
    """Probe the argument as a flight id, then a reservation id, else a user id."""
    if len(args) != 1:
        return None

    flight_id = flight_id_from_string(args[0])
    if flight_id is not None:
        return EntityArguments(EntityKind.FLIGHT, numeric_id=flight_id)

    reservation_id = reservation_id_from_string(args[0])
    if reservation_id is not None:
        return EntityArguments(EntityKind.RESERVATION, numeric_id=reservation_id)

    return EntityArguments(EntityKind.USER, user_id=args[0])


def q01_unparse_arguments(data: EntityArguments) -> List[str]:
    if data.kind == EntityKind.FLIGHT:
        return [flight_id_to_string(data.numeric_id)]
    if data.kind == EntityKind.RESERVATION:
        return [reservation_id_to_string(data.numeric_id)]
    return [data.user_id]


def _q01_user(database: Database, user_id: str, writer: QueryWriter):
    user = database.users.get_by_id(user_id)
    if user is None or not user_is_active(user):
        return

    total_spent = 0.0
    for reservation_id in database.users.get_reservations_by_user(user_id):
        total_spent += reservation_calculate_price(database.reservations.get_by_id(reservation_id))

    writer.write_new_object()
    writer.write_new_field("name", "%s", user.name)
    writer.write_new_field("sex", "%s", user.sex.value)
    writer.write_new_field("age", "%d", user_calculate_age(user, database.reference_date))
    writer.write_new_field("country_code", "%s", country_code_to_string(user.country_code))
    writer.write_new_field("passport", "%s", user.passport)
    writer.write_new_field("number_of_flights", "%d",
                           database.users.count_flights_by_user(user_id))
    writer.write_new_field("number_of_reservations", "%d",
                           database.users.count_reservations_by_user(user_id))
    writer.write_new_field("total_spent", "%.3f", total_spent)


def _q01_flight(database: Database, flight_id: int, writer: QueryWriter):
    flight = database.flights.get_by_id(flight_id)
    if flight is None:
        return

    writer.write_new_object()
    writer.write_new_field("airline", "%s", flight.airline)
    writer.write_new_field("plane_model", "%s", flight.plane_model)
    writer.write_new_field("origin", "%s", airport_code_to_string(flight.origin))
    writer.write_new_field("destination", "%s", airport_code_to_string(flight.destination))
    writer.write_new_field("schedule_departure_date", "%s",
                           date_and_time_to_string(flight.schedule_departure))
    writer.write_new_field("schedule_arrival_date", "%s",
                           date_and_time_to_string(flight.schedule_arrival))
    writer.write_new_field("passengers", "%d", flight.passengers)
    writer.write_new_field("delay", "%d", flight_calculate_delay(flight))


def _q01_reservation(database: Database, reservation_id: int, writer: QueryWriter):
    reservation = database.reservations.get_by_id(reservation_id)
    if reservation is None:
        return

    writer.write_new_object()
    writer.write_new_field("hotel_id", "%s", hotel_id_to_string(reservation.hotel_id))
    writer.write_new_field("hotel_name", "%s", reservation.hotel_name)
    writer.write_new_field("hotel_stars", "%d", reservation.hotel_stars)
    writer.write_new_field("begin_date", "%s", date_to_string(reservation.begin_date))
    writer.write_new_field("end_date", "%s", date_to_string(reservation.end_date))
    writer.write_new_field("includes_breakfast", "%s",
                           includes_breakfast_to_string(reservation.includes_breakfast))
    writer.write_new_field("nights", "%d", reservation_calculate_nights(reservation))
    writer.write_new_field("total_price", "%.3f", reservation_calculate_price(reservation))


def q01_execute(database: Database, statistics: Any, instance: QueryInstance,
                writer: QueryWriter) -> int:
    data: EntityArguments = instance.argument_data
    if data.kind == EntityKind.USER:
        _q01_user(database, data.user_id, writer)
    elif data.kind == EntityKind.FLIGHT:
        _q01_flight(database, data.numeric_id, writer)
    else:
        _q01_reservation(database, data.numeric_id, writer)
    return 0


# --- Q02: user history -------------------------------------------------------

HISTORY_FILTERS = ("flights", "reservations")


@dataclass(frozen=True)
class HistoryArguments:
    user_id: str
    filter: Optional[str] = None


def q02_parse_arguments(args: List[str]) -> Optional[HistoryArguments]:
    if len(args) == 1:
        return HistoryArguments(args[0])
    if len(args) == 2 and args[1] in HISTORY_FILTERS:
        return HistoryArguments(args[0], args[1])
    return None


def q02_unparse_arguments(data: HistoryArguments) -> List[str]:
    return [data.user_id] if data.filter is None else [data.user_id, data.filter]


def q02_execute(database: Database, statistics: Any, instance: QueryInstance,
                writer: QueryWriter) -> int:
    data: HistoryArguments = instance.argument_data
    user = database.users.get_by_id(data.user_id)
    if user is None or not user_is_active(user):
        return 0

    # (date and time, id, id text, type)
    items: List[Tuple[int, int, str, str]] = []
    if data.filter != "reservations":
        for flight_id in database.users.get_flights_by_user(user.id):
            flight = database.flights.get_by_id(flight_id)
            items.append((flight.schedule_departure, flight.id,
                          flight_id_to_string(flight.id), "flight"))
    if data.filter != "flights":
        for reservation_id in database.users.get_reservations_by_user(user.id):
            reservation = database.reservations.get_by_id(reservation_id)
            items.append((date_and_time_from_date(reservation.begin_date), reservation.id,
                          reservation_id_to_string(reservation.id), "reservation"))

    items.sort(key=lambda item: (-item[0], item[1]))
    for date_and_time, _, id_text, item_type in items:
        writer.write_new_object()
        writer.write_new_field("id", "%s", id_text)
        writer.write_new_field("date", "%s", date_to_string(date_and_time_get_date(date_and_time)))
        if data.filter is None:
            writer.write_new_field("type", "%s", item_type)
    return 0


# --- Hotel id argument (Q03, Q04) --------------------------------------------

def _parse_hotel_argument(args: List[str]) -> Optional[int]:
    if len(args) != 1:
        return None
    return hotel_id_from_string(args[0])


def _unparse_hotel_argument(hotel_id: int) -> List[str]:
    return [hotel_id_to_string(hotel_id)]


# --- Q03: average hotel rating -----------------------------------------------

def q03_generate_statistics(database: Database,
                            instances: List[QueryInstance]) -> Dict[int, List[int]]:
    """Sum and count of the non-zero ratings of every hotel asked for."""
    ratings: Dict[int, List[int]] = {instance.argument_data: [0, 0] for instance in instances}
    for reservation in database.reservations:
        entry = ratings.get(reservation.hotel_id)
        if entry is not None and reservation.rating > 0:
            entry[0] += reservation.rating
            entry[1] += 1
    return ratings


def q03_execute(database: Database, statistics: Dict[int, List[int]], instance: QueryInstance,
                writer: QueryWriter) -> int:
    entry = statistics.get(instance.argument_data)
    if entry is None:
        return _internal_error("Q03", instance)

    rating_sum, rating_count = entry
    if rating_count == 0:
        return 0
    writer.write_new_object()
    writer.write_new_field("rating", "%.3f", rating_sum / rating_count)
    return 0


# --- Q04: hotel reservations -------------------------------------------------

def q04_generate_statistics(database: Database, instances: List[QueryInstance]) -> Dict[int, list]:
    """Reservations of every hotel asked for, newest first, then by id."""
    hotels: Dict[int, list] = {instance.argument_data: [] for instance in instances}
    for reservation in database.reservations:
        bucket = hotels.get(reservation.hotel_id)
        if bucket is not None:
            bucket.append(reservation)
    for bucket in hotels.values():
        bucket.sort(key=lambda reservation: (-reservation.begin_date, reservation.id))
    return hotels


def q04_execute(database: Database, statistics: Dict[int, list], instance: QueryInstance,
                writer: QueryWriter) -> int:
    reservations = statistics.get(instance.argument_data)
    if reservations is None:
        return _internal_error("Q04", instance)

    for reservation in reservations:
        writer.write_new_object()
        writer.write_new_field("id", "%s", reservation_id_to_string(reservation.id))
        writer.write_new_field("begin_date", "%s", date_to_string(reservation.begin_date))
        writer.write_new_field("end_date", "%s", date_to_string(reservation.end_date))
        writer.write_new_field("user_id", "%s", reservation.user_id)
        writer.write_new_field("rating", "%d", reservation.rating)
        writer.write_new_field("total_price", "%.3f", reservation_calculate_price(reservation))
    return 0


# --- Q05: flights from an airport in a time range ----------------------------

@dataclass(frozen=True)
class DepartureFilter:
    origin: int
    begin: int
    end: int


def q05_parse_arguments(args: List[str]) -> Optional[DepartureFilter]:
    if len(args) != 3:
        return None
    origin = airport_code_from_string(args[0])
    begin = date_and_time_from_string(args[1])
    end = date_and_time_from_string(args[2])
    if origin is None or begin is None or end is None:
        return None
    return DepartureFilter(origin, begin, end)


def q05_unparse_arguments(data: DepartureFilter) -> List[str]:
    return [airport_code_to_string(data.origin), date_and_time_to_string(data.begin),
            date_and_time_to_string(data.end)]


def q05_generate_statistics(database: Database,
                            instances: List[QueryInstance]) -> Dict[DepartureFilter, list]:
    """Flights matching each distinct filter, latest departure first, then by id."""
    matches: Dict[DepartureFilter, list] = {}
    by_origin: Dict[int, List[DepartureFilter]] = {}
    for instance in instances:
        departure_filter = instance.argument_data
        if departure_filter not in matches:
            matches[departure_filter] = []
            by_origin.setdefault(departure_filter.origin, []).append(departure_filter)

    for flight in database.flights:
        for departure_filter in by_origin.get(flight.origin, ()):
            if departure_filter.begin <= flight.schedule_departure <= departure_filter.end:
                matches[departure_filter].append(flight)

    for flights in matches.values():
        flights.sort(key=lambda flight: (-flight.schedule_departure, flight.id))
    return matches


def q05_execute(database: Database, statistics: Dict[DepartureFilter, list],
                instance: QueryInstance, writer: QueryWriter) -> int:
    flights = statistics.get(instance.argument_data)
    if flights is None:
        return _internal_error("Q05", instance)

    for flight in flights:
        writer.write_new_object()
        writer.write_new_field("id", "%s", flight_id_to_string(flight.id))
        writer.write_new_field("schedule_departure_date", "%s",
                               date_and_time_to_string(flight.schedule_departure))
        writer.write_new_field("destination", "%s", airport_code_to_string(flight.destination))
        writer.write_new_field("airline", "%s", flight.airline)
        writer.write_new_field("plane_model", "%s", flight.plane_model)
    return 0


# --- Top-N argument (Q06, Q07) -----------------------------------------------

def _parse_positive(text: str) -> Optional[int]:
    value = parse_uint32(text)
    if value is None or value == 0:
        return None
    return value


# --- Q06: busiest airports of a year -----------------------------------------

@dataclass(frozen=True)
class YearTopArguments:
    year: int
    count: int


def q06_parse_arguments(args: List[str]) -> Optional[YearTopArguments]:
    if len(args) != 2 or len(args[0]) != YEAR_DIGITS:
        return None
    year = parse_uint32(args[0])
    count = _parse_positive(args[1])
    if year is None or count is None:
        return None
    return YearTopArguments(year, count)


def q06_unparse_arguments(data: YearTopArguments) -> List[str]:
    return ["%04d" % data.year, str(data.count)]


def q06_generate_statistics(database: Database,
                            instances: List[QueryInstance]) -> Dict[int, List[Tuple[int, int]]]:
    """
    Airports of every year asked for, by passenger count.

    A flight's passengers count for both its origin and its destination.

    Returns:
        year -> [(airport, passengers)] sorted by count descending, then code
    """
    per_year: Dict[int, Dict[int, int]] = {instance.argument_data.year: {}
                                           for instance in instances}
    for flight in database.flights:
        airports = per_year.get(date_get_year(date_and_time_get_date(flight.schedule_departure)))
        if airports is None:
            continue
        airports[flight.origin] = airports.get(flight.origin, 0) + flight.passengers
        airports[flight.destination] = airports.get(flight.destination, 0) + flight.passengers

    return {year: sorted(airports.items(), key=lambda item: (-item[1], item[0]))
            for year, airports in per_year.items()}


def q06_execute(database: Database, statistics: Dict[int, List[Tuple[int, int]]],
                instance: QueryInstance, writer: QueryWriter) -> int:
    data: YearTopArguments = instance.argument_data
    airports = statistics.get(data.year)
    if airports is None:
        return _internal_error("Q06", instance)

    for airport, passengers in airports[:data.count]:
        writer.write_new_object()
        writer.write_new_field("name", "%s", airport_code_to_string(airport))
        writer.write_new_field("passengers", "%d", passengers)
    return 0


# --- Q07: airports by median delay -------------------------------------------

def median(values: List[int]) -> int:
    """Median of a non-empty list; even lengths floor the mean of the middle pair."""
    ordered = sorted(values)
    middle = len(ordered) // 2
    if len(ordered) % 2:
        return ordered[middle]
    return (ordered[middle - 1] + ordered[middle]) // 2


def q07_parse_arguments(args: List[str]) -> Optional[int]:
    if len(args) != 1:
        return None
    return _parse_positive(args[0])


def q07_unparse_arguments(count: int) -> List[str]:
    return [str(count)]


def q07_generate_statistics(database: Database,
                            instances: List[QueryInstance]) -> List[Tuple[int, int]]:
    """Median departure delay per origin airport, largest first, then by code."""
    delays: Dict[int, List[int]] = {}
    for flight in database.flights:
        delays.setdefault(flight.origin, []).append(flight_calculate_delay(flight))

    medians = [(airport, median(values)) for airport, values in delays.items()]
    medians.sort(key=lambda item: (-item[1], item[0]))
    return medians


def q07_execute(database: Database, statistics: List[Tuple[int, int]], instance: QueryInstance,
                writer: QueryWriter) -> int:
    for airport, airport_median in statistics[:instance.argument_data]:
        writer.write_new_object()
        writer.write_new_field("name", "%s", airport_code_to_string(airport))
        writer.write_new_field("median", "%d", airport_median)
    return 0


# --- Q08: hotel revenue ------------------------------------------------------

@dataclass(frozen=True)
class RevenueArguments:
    hotel_id: int
    begin: int
    end: int


def q08_parse_arguments(args: List[str]) -> Optional[RevenueArguments]:
    if len(args) != 3:
        return None
    hotel_id = hotel_id_from_string(args[0])
    begin = date_from_string(args[1])
    end = date_from_string(args[2])
    if hotel_id is None or begin is None or end is None:
        return None
    return RevenueArguments(hotel_id, begin, end)


def q08_unparse_arguments(data: RevenueArguments) -> List[str]:
    return [hotel_id_to_string(data.hotel_id), date_to_string(data.begin),
            date_to_string(data.end)]


def reservation_revenue_in_range(price_per_night: int, begin: int, end: int,
                                 range_begin: int, range_end: int) -> int:
    """
    Revenue of a stay inside an inclusive date range.

    The end date of a stay is the check-out day and earns nothing.
    """
    first = max(date_to_day_number(begin), date_to_day_number(range_begin))
    last = min(date_to_day_number(end) - 1, date_to_day_number(range_end))
    if last < first:
        return 0
    return price_per_night * (last - first + 1)


def q08_generate_statistics(database: Database,
                            instances: List[QueryInstance]) -> Dict[RevenueArguments, int]:
    revenues: Dict[RevenueArguments, int] = {}
    by_hotel: Dict[int, List[RevenueArguments]] = {}
    for instance in instances:
        data = instance.argument_data
        if data not in revenues:
            revenues[data] = 0
            by_hotel.setdefault(data.hotel_id, []).append(data)

    for reservation in database.reservations:
        for data in by_hotel.get(reservation.hotel_id, ()):
            revenues[data] += reservation_revenue_in_range(
                reservation.price_per_night, reservation.begin_date, reservation.end_date,
                data.begin, data.end)
    return revenues


def q08_execute(database: Database, statistics: Dict[RevenueArguments, int],
                instance: QueryInstance, writer: QueryWriter) -> int:
    revenue = statistics.get(instance.argument_data)
    if revenue is None:
        return _internal_error("Q08", instance)

    writer.write_new_object()
    writer.write_new_field("revenue", "%d", revenue)
    return 0


# --- Q09: user name prefix ---------------------------------------------------

def q09_parse_arguments(args: List[str]) -> Optional[str]:
    if len(args) != 1:
        return None
    return args[0]


def q09_unparse_arguments(prefix: str) -> List[str]:
    return [prefix]


def _fallback_collation_key(text: str) -> Tuple[str, str]:
    """Accent- and case-insensitive ordering, then code points."""
    stripped = ''.join(c for c in unicodedata.normalize('NFKD', text)
                       if not unicodedata.combining(c))
    return stripped.casefold(), text


def _collation_key_function() -> Callable[[str], Any]:
    try:
        locale.setlocale(locale.LC_COLLATE, COLLATION_LOCALE)
    except locale.Error:
        return _fallback_collation_key
    return locale.strxfrm


def q09_generate_statistics(database: Database,
                            instances: List[QueryInstance]) -> Dict[str, list]:
    """
    Active users whose names start with each distinct prefix.

    Prefixes are matched on code points. Results are ordered by name under
    en_US.UTF-8 collation (or an accent-folding approximation when that
    locale is missing), then by user id.
    """
    prefixes = sorted({instance.argument_data for instance in instances})
    matches: Dict[str, list] = {prefix: [] for prefix in prefixes}

    for user in database.users:
        if not user_is_active(user):
            continue
        for prefix in prefixes:
            head = user.name[:len(prefix)]
            if prefix > head:
                break
            if prefix == head:
                matches[prefix].append(user)

    previous = locale.setlocale(locale.LC_COLLATE)
    try:
        key = _collation_key_function()
        for users in matches.values():
            users.sort(key=lambda user: (key(user.name), user.id))
    finally:
        locale.setlocale(locale.LC_COLLATE, previous)
    return matches


def q09_execute(database: Database, statistics: Dict[str, list], instance: QueryInstance,
                writer: QueryWriter) -> int:
    users = statistics.get(instance.argument_data)
    if users is None:
        return _internal_error("Q09", instance)

    for user in users:
        writer.write_new_object()
        writer.write_new_field("id", "%s", user.id)
        writer.write_new_field("name", "%s", user.name)
    return 0


# --- Q10: system statistics --------------------------------------------------

MONTHS_PER_YEAR = 12
PERIOD_COUNTERS = ("users", "flights", "passengers", "unique_passengers", "reservations")


@dataclass(frozen=True)
class PeriodArguments:
    year: Optional[int] = None
    month: Optional[int] = None


def q10_parse_arguments(args: List[str]) -> Optional[PeriodArguments]:
    if len(args) > 2:
        return None
    if not args:
        return PeriodArguments()

    year = parse_uint32(args[0])
    if year is None:
        return None
    if len(args) == 1:
        return PeriodArguments(year)

    month = parse_uint32(args[1])
    if month is None or month < 1 or month > MONTHS_PER_YEAR:
        return None
    return PeriodArguments(year, month)


def q10_unparse_arguments(data: PeriodArguments) -> List[str]:
    if data.year is None:
        return []
    if data.month is None:
        return [str(data.year)]
    return [str(data.year), str(data.month)]


def _period_of(date: int, period: PeriodArguments) -> Optional[int]:
    """The year, month or day a date falls in, or None outside the period."""
    if period.year is None:
        return date_get_year(date)
    if date_get_year(date) != period.year:
        return None
    if period.month is None:
        return date_get_month(date)
    if date_get_month(date) != period.month:
        return None
    return date_get_day(date)


def q10_generate_statistics(database: Database,
                            instances: List[QueryInstance]) -> Dict[PeriodArguments, dict]:
    """
    Event counters per bucket for every distinct period asked for.

    Returns:
        period -> {bucket: [users, flights, passengers, unique passengers, reservations]}
    """
    periods = {instance.argument_data: {} for instance in instances}

    def counters(buckets: dict, bucket: int) -> List[int]:
        if bucket not in buckets:
            buckets[bucket] = [0] * len(PERIOD_COUNTERS)
        return buckets[bucket]

    def visit_user(user, flight_ids, _):
        created = date_and_time_get_date(user.account_creation)
        departures = [date_and_time_get_date(database.flights.get_by_id(flight_id)
                                             .schedule_departure)
                      for flight_id in flight_ids]
        for period, buckets in periods.items():
            bucket = _period_of(created, period)
            if bucket is not None:
                counters(buckets, bucket)[0] += 1

            flown = set()
            for departure in departures:
                bucket = _period_of(departure, period)
                if bucket is not None:
                    counters(buckets, bucket)[2] += 1
                    flown.add(bucket)
            for bucket in flown:
                counters(buckets, bucket)[3] += 1
        return 0

    database.users.iter_with_flights(visit_user)

    for flight in database.flights:
        departure = date_and_time_get_date(flight.schedule_departure)
        for period, buckets in periods.items():
            bucket = _period_of(departure, period)
            if bucket is not None:
                counters(buckets, bucket)[1] += 1

    for reservation in database.reservations:
        for period, buckets in periods.items():
            bucket = _period_of(reservation.begin_date, period)
            if bucket is not None:
                counters(buckets, bucket)[4] += 1

    return periods


def q10_execute(database: Database, statistics: Dict[PeriodArguments, dict],
                instance: QueryInstance, writer: QueryWriter) -> int:
    period: PeriodArguments = instance.argument_data
    buckets = statistics.get(period)
    if buckets is None:
        return _internal_error("Q10", instance)

    if period.year is None:
        bucket_name = "year"
    elif period.month is None:
        bucket_name = "month"
    else:
        bucket_name = "day"

    for bucket in sorted(buckets):
        writer.write_new_object()
        writer.write_new_field(bucket_name, "%d", bucket)
        for name, value in zip(PERIOD_COUNTERS, buckets[bucket]):
            writer.write_new_field(name, "%d", value)
    return 0


# --- Registry ----------------------------------------------------------------

def query_type_list_create() -> QueryTypeList:
    """Build a registry of every query type, numbered 1 to 10."""
    return QueryTypeList([
        QueryType("entity details", q01_parse_arguments, q01_execute,
                  unparse_arguments=q01_unparse_arguments),
        QueryType("user history", q02_parse_arguments, q02_execute,
                  unparse_arguments=q02_unparse_arguments),
        QueryType("hotel rating", _parse_hotel_argument, q03_execute,
                  generate_statistics=q03_generate_statistics,
                  unparse_arguments=_unparse_hotel_argument),
        QueryType("hotel reservations", _parse_hotel_argument, q04_execute,
                  generate_statistics=q04_generate_statistics,
                  unparse_arguments=_unparse_hotel_argument),
        QueryType("airport departures", q05_parse_arguments, q05_execute,
                  generate_statistics=q05_generate_statistics,
                  unparse_arguments=q05_unparse_arguments),
        QueryType("busiest airports", q06_parse_arguments, q06_execute,
                  generate_statistics=q06_generate_statistics,
                  unparse_arguments=q06_unparse_arguments),
        QueryType("median delays", q07_parse_arguments, q07_execute,
                  generate_statistics=q07_generate_statistics,
                  unparse_arguments=q07_unparse_arguments),
        QueryType("hotel revenue", q08_parse_arguments, q08_execute,
                  generate_statistics=q08_generate_statistics,
                  unparse_arguments=q08_unparse_arguments),
        QueryType("name prefix", q09_parse_arguments, q09_execute,
                  generate_statistics=q09_generate_statistics,
                  unparse_arguments=q09_unparse_arguments),
        QueryType("system statistics", q10_parse_arguments, q10_execute,
                  generate_statistics=q10_generate_statistics,
                  unparse_arguments=q10_unparse_arguments),
    ])
