"""
Entity Module

Row types stored by the managers, plus the values derived from them at
query time (age, nights, price, delay).

Dates are packed integers from date_module; codes are packed integers
from types_module.
"""

from dataclasses import dataclass

from date_module import (
    date_get_year, date_get_month, date_get_day, date_diff,
    date_and_time_diff,
)
from types_module import AccountStatus, Sex, IncludesBreakfast


@dataclass
class User:
    """A registered user of the airline platform."""
    id: str = ''
    name: str = ''
    sex: Sex = Sex.MALE
    passport: str = ''
    country_code: int = 0                # packed letters
    birth_date: int = 0                  # YYYYMMDD
    account_creation: int = 0            # YYYYMMDDHHMMSS
    account_status: AccountStatus = AccountStatus.ACTIVE


@dataclass
class Flight:
    """A scheduled flight and its passenger count."""
    id: int = 0
    airline: str = ''
    plane_model: str = ''
    total_seats: int = 0
    origin: int = 0                      # packed airport code
    destination: int = 0                 # packed airport code
    schedule_departure: int = 0          # YYYYMMDDHHMMSS
    schedule_arrival: int = 0            # YYYYMMDDHHMMSS
    real_departure: int = 0              # YYYYMMDDHHMMSS
    passengers: int = 0


@dataclass
class Reservation:
    """A hotel reservation booked by a user."""
    id: int = 0
    user_id: str = ''
    hotel_id: int = 0
    hotel_name: str = ''
    hotel_stars: int = 0
    city_tax: int = 0                    # percentage
    begin_date: int = 0                  # YYYYMMDD
    end_date: int = 0                    # YYYYMMDD, exclusive
    price_per_night: int = 0
    includes_breakfast: IncludesBreakfast = IncludesBreakfast.NONE
    rating: int = 0                      # 0 means unrated


def user_is_active(user: User) -> bool:
    return user.account_status == AccountStatus.ACTIVE


def user_calculate_age(user: User, reference_date: int) -> int:
    """
    Whole years between a user's birth date and a reference date.

    Args:
        user: User whose age to compute
        reference_date: Packed YYYYMMDD date taken as "today"

    Returns:
        Age in years
    """
    birth = user.birth_date
    age = date_get_year(reference_date) - date_get_year(birth)
    if (date_get_month(reference_date), date_get_day(reference_date)) < \
            (date_get_month(birth), date_get_day(birth)):
        age -= 1
    return age


def reservation_calculate_nights(reservation: Reservation) -> int:
    return date_diff(reservation.end_date, reservation.begin_date)


def reservation_calculate_price(reservation: Reservation) -> float:
    """Total price of a stay: nights at the nightly price plus city tax."""
    base = reservation.price_per_night * reservation_calculate_nights(reservation)
    return base + base / 100 * reservation.city_tax


def flight_calculate_delay(flight: Flight) -> int:
    """Departure delay in seconds (negative for early departures)."""
    return date_and_time_diff(flight.real_departure, flight.schedule_departure)
