"""
Loader Module

Streams the four dataset files into a Database:

    users.csv, flights.csv, reservations.csv, passengers.csv

Files are ';'-separated with a header line. Every rejected line is copied
to <errors_dir>/<file>_errors.csv, after that file's header.

Load order matters: users first, so reservations and passengers can be
checked against them. Flights are held back until the passengers file
has been read, since a flight that has more passengers than seats is
rejected along with all of its passenger rows.
"""

import os
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from database_module import Database, IntegrityError
from date_module import date_from_string, date_and_time_from_string, date_and_time_from_date
from entity_module import User, Flight, Reservation, user_is_active
from types_module import (
    parse_uint32, flight_id_from_string, reservation_id_from_string, hotel_id_from_string,
    airport_code_from_string, country_code_from_string, account_status_from_string,
    sex_from_string, includes_breakfast_from_string, email_is_valid,
)

# Constants
RESULTS_DIRECTORY = "Resultados"
DATASET_FILES = ("users", "flights", "reservations", "passengers")
FIELD_SEPARATOR = ';'
USER_FIELD_COUNT = 12
FLIGHT_FIELD_COUNT = 13
RESERVATION_FIELD_COUNT = 14
PASSENGER_FIELD_COUNT = 2
MAX_HOTEL_STARS = 5
MAX_RATING = 5


@dataclass
class LoadStats:
    """Accepted and rejected line counts for one dataset file."""
    accepted: int = 0
    rejected: int = 0


class ErrorFile:
    """Collects rejected lines of one dataset file."""

    def __init__(self, errors_dir: Optional[str], name: str, header: str):
        self.lines: List[str] = []
        self.file = None
        if errors_dir is not None:
            os.makedirs(errors_dir, exist_ok=True)
            self.file = open(os.path.join(errors_dir, f"{name}_errors.csv"), 'w',
                             encoding='utf-8')
            self.file.write(header + '\n')

    def report(self, line: str):
        self.lines.append(line)
        if self.file is not None:
            self.file.write(line + '\n')

    def close(self):
        if self.file is not None:
            self.file.close()
            self.file = None


def split_fields(line: str, count: int) -> Optional[List[str]]:
    """Split a line on ';', requiring exactly count fields."""
    fields = line.split(FIELD_SEPARATOR)
    if len(fields) != count:
        return None
    return fields


def _read_lines(path: str) -> Iterator[str]:
    """Yield the non-empty lines of a dataset file, header included."""
    with open(path, 'r', encoding='utf-8', newline='') as file:
        for line in file:
            line = line.rstrip('\r\n')
            if line:
                yield line


def _read_header(path: str) -> str:
    with open(path, 'r', encoding='utf-8', newline='') as file:
        return file.readline().rstrip('\r\n')


def user_from_fields(fields: List[str]) -> Optional[User]:
    """Validate the fields of a users.csv line."""
    (user_id, name, email, phone, birth, sex, passport, country,
     address, creation, pay_method, status) = fields

    if not user_id or not name or not phone or not passport or not address or not pay_method:
        return None
    if not email_is_valid(email):
        return None

    birth_date = date_from_string(birth)
    account_creation = date_and_time_from_string(creation)
    sex_value = sex_from_string(sex)
    country_code = country_code_from_string(country)
    account_status = account_status_from_string(status)
    if None in (birth_date, account_creation, sex_value, country_code, account_status):
        return None
    if account_creation <= date_and_time_from_date(birth_date):
        return None

    return User(id=user_id, name=name, sex=sex_value, passport=passport,
                country_code=country_code, birth_date=birth_date,
                account_creation=account_creation, account_status=account_status)


def flight_from_fields(fields: List[str]) -> Optional[Flight]:
    """Validate the fields of a flights.csv line."""
    (flight_id, airline, plane_model, seats, origin, destination, schedule_departure,
     schedule_arrival, real_departure, real_arrival, pilot, copilot, _notes) = fields

    if not airline or not plane_model or not pilot or not copilot:
        return None

    values = (
        flight_id_from_string(flight_id),
        parse_uint32(seats),
        airport_code_from_string(origin),
        airport_code_from_string(destination),
        date_and_time_from_string(schedule_departure),
        date_and_time_from_string(schedule_arrival),
        date_and_time_from_string(real_departure),
        date_and_time_from_string(real_arrival),
    )
    if None in values:
        return None
    (id_value, total_seats, origin_code, destination_code,
     departure, arrival, real_departure_value, real_arrival_value) = values

    if total_seats == 0 or arrival <= departure or real_arrival_value < real_departure_value:
        return None

    return Flight(id=id_value, airline=airline, plane_model=plane_model,
                  total_seats=total_seats, origin=origin_code, destination=destination_code,
                  schedule_departure=departure, schedule_arrival=arrival,
                  real_departure=real_departure_value)


def reservation_from_fields(fields: List[str]) -> Optional[Reservation]:
    """Validate the fields of a reservations.csv line."""
    (reservation_id, user_id, hotel_id, hotel_name, stars, city_tax, address, begin, end,
     price, breakfast, _room_details, rating, _comment) = fields

    if not user_id or not address:
        return None

    values = (
        reservation_id_from_string(reservation_id),
        hotel_id_from_string(hotel_id),
        parse_uint32(stars),
        parse_uint32(city_tax),
        date_from_string(begin),
        date_from_string(end),
        parse_uint32(price),
        includes_breakfast_from_string(breakfast),
        parse_uint32(rating) if rating else 0,
    )
    if None in values:
        return None
    (id_value, hotel_value, stars_value, tax_value, begin_date, end_date,
     price_value, breakfast_value, rating_value) = values

    if stars_value < 1 or stars_value > MAX_HOTEL_STARS:
        return None
    if rating and (rating_value < 1 or rating_value > MAX_RATING):
        return None
    if end_date <= begin_date or price_value == 0:
        return None

    return Reservation(id=id_value, user_id=user_id, hotel_id=hotel_value,
                       hotel_name=hotel_name, hotel_stars=stars_value, city_tax=tax_value,
                       begin_date=begin_date, end_date=end_date, price_per_night=price_value,
                       includes_breakfast=breakfast_value, rating=rating_value)


def _load_rows(path: str, errors: ErrorFile, field_count: int,
               from_fields: Callable[[List[str]], Any],
               add: Callable[[Any], Any]) -> LoadStats:
    """Validate each line of a file and hand the resulting row to add()."""
    stats = LoadStats()
    lines = _read_lines(path)
    next(lines, None)
    for line in lines:
        fields = split_fields(line, field_count)
        row = from_fields(fields) if fields else None
        if row is None:
            errors.report(line)
            stats.rejected += 1
            continue
        try:
            add(row)
        except IntegrityError:
            errors.report(line)
            stats.rejected += 1
        else:
            stats.accepted += 1
    return stats


def _read_flights(path: str, errors: ErrorFile,
                  stats: LoadStats) -> Dict[int, Tuple[Flight, str]]:
    """Parse flights.csv into pending flights, keyed by id in file order."""
    pending: Dict[int, Tuple[Flight, str]] = {}
    lines = _read_lines(path)
    next(lines, None)
    for line in lines:
        fields = split_fields(line, FLIGHT_FIELD_COUNT)
        flight = flight_from_fields(fields) if fields else None
        if flight is None or flight.id in pending:
            errors.report(line)
            stats.rejected += 1
        else:
            pending[flight.id] = (flight, line)
    return pending


def _read_passengers(database: Database, path: str, pending: Dict[int, Tuple[Flight, str]],
                     errors: ErrorFile, stats: LoadStats) -> Dict[int, List[Tuple[str, str]]]:
    """Group valid passenger rows by flight; orphan rows are reported."""
    passengers: Dict[int, List[Tuple[str, str]]] = {}
    lines = _read_lines(path)
    next(lines, None)
    for line in lines:
        fields = split_fields(line, PASSENGER_FIELD_COUNT)
        if fields is None:
            errors.report(line)
            stats.rejected += 1
            continue

        flight_id = flight_id_from_string(fields[0])
        user = database.users.get_by_id(fields[1])
        if flight_id not in pending or user is None or not user_is_active(user):
            errors.report(line)
            stats.rejected += 1
            continue

        passengers.setdefault(flight_id, []).append((user.id, line))
    return passengers


def dataset_load(database: Database, dataset_dir: str,
                 errors_dir: Optional[str] = RESULTS_DIRECTORY) -> Dict[str, LoadStats]:
    """
    Load a dataset directory into a database.

    Args:
        database: Empty database to fill
        dataset_dir: Directory holding the four dataset files
        errors_dir: Where to write the *_errors.csv files (None: don't write)

    Returns:
        Load statistics per dataset file

    Raises:
        OSError: If a dataset file cannot be read or an errors file written
    """
    paths = {name: os.path.join(dataset_dir, f"{name}.csv") for name in DATASET_FILES}
    for path in paths.values():
        if not os.path.isfile(path):
            raise FileNotFoundError(f"Dataset file not found: {path}")

    result = {name: LoadStats() for name in DATASET_FILES}
    errors: Dict[str, ErrorFile] = {}
    try:
        for name, path in paths.items():
            errors[name] = ErrorFile(errors_dir, name, _read_header(path))
        flight_errors = errors["flights"]
        passenger_errors = errors["passengers"]

        result["users"] = _load_rows(paths["users"], errors["users"], USER_FIELD_COUNT,
                                     user_from_fields, database.add_user)
        pending = _read_flights(paths["flights"], flight_errors, result["flights"])
        result["reservations"] = _load_rows(paths["reservations"], errors["reservations"],
                                            RESERVATION_FIELD_COUNT, reservation_from_fields,
                                            database.add_reservation)
        passengers = _read_passengers(database, paths["passengers"], pending,
                                      passenger_errors, result["passengers"])

        for flight_id, (flight, line) in pending.items():
            rows = passengers.get(flight_id, [])
            try:
                database.add_flight(flight, [user_id for user_id, _ in rows])
            except IntegrityError:
                flight_errors.report(line)
                result["flights"].rejected += 1
                for _, passenger_line in rows:
                    passenger_errors.report(passenger_line)
                result["passengers"].rejected += len(rows)
            else:
                result["flights"].accepted += 1
                result["passengers"].accepted += len(rows)
    finally:
        for error_file in errors.values():
            error_file.close()

    return result
