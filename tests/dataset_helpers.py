"""
Helpers for building small synthetic datasets in tests.
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from date_module import date_from_string, date_and_time_from_string
from entity_module import User, Flight, Reservation
from types_module import (
    AccountStatus, Sex, IncludesBreakfast, airport_code_from_string, country_code_from_string,
)
from query_dispatcher import dispatch_single
from query_parser import query_parse
from writer_module import QueryWriter

USERS_HEADER = ("id;name;email;phone_number;birth_date;sex;passport;country_code;address;"
                "account_creation;pay_method;account_status")
FLIGHTS_HEADER = ("id;airline;plane_model;total_seats;origin;destination;"
                  "schedule_departure_date;schedule_arrival_date;real_departure_date;"
                  "real_arrival_date;pilot;copilot;notes")
RESERVATIONS_HEADER = ("id;user_id;hotel_id;hotel_name;hotel_stars;city_tax;address;"
                       "begin_date;end_date;price_per_night;includes_breakfast;room_details;"
                       "rating;comment")
PASSENGERS_HEADER = "flight_id;user_id"


def make_user(user_id, name="John Doe", active=True, birth="1990/05/20",
              creation="2020/01/01 12:00:00"):
    return User(id=user_id, name=name, sex=Sex.MALE, passport="PT123456",
                country_code=country_code_from_string("PT"),
                birth_date=date_from_string(birth),
                account_creation=date_and_time_from_string(creation),
                account_status=AccountStatus.ACTIVE if active else AccountStatus.INACTIVE)


def make_flight(flight_id, origin="LIS", destination="OPO", departure="2023/01/01 10:00:00",
                arrival="2023/01/01 11:00:00", real_departure=None, seats=100,
                airline="TAP", plane_model="A320"):
    return Flight(id=flight_id, airline=airline, plane_model=plane_model, total_seats=seats,
                  origin=airport_code_from_string(origin),
                  destination=airport_code_from_string(destination),
                  schedule_departure=date_and_time_from_string(departure),
                  schedule_arrival=date_and_time_from_string(arrival),
                  real_departure=date_and_time_from_string(real_departure or departure))


def make_reservation(reservation_id, user_id, hotel_id=1001, begin="2022/01/10",
                     end="2022/01/15", price=100, city_tax=0, rating=0, stars=4,
                     hotel_name="Hotel Central"):
    return Reservation(id=reservation_id, user_id=user_id, hotel_id=hotel_id,
                       hotel_name=hotel_name, hotel_stars=stars, city_tax=city_tax,
                       begin_date=date_from_string(begin), end_date=date_from_string(end),
                       price_per_night=price, includes_breakfast=IncludesBreakfast.NO,
                       rating=rating)


def user_line(user_id, name="John Doe", status="active", email="john@mail.com",
              birth="1990/05/20", creation="2020/01/01 12:00:00", sex="M", country="PT"):
    return ";".join([user_id, name, email, "+351 912345678", birth, sex, "PT123456", country,
                     "Rua A", creation, "credit_card", status])


def flight_line(flight_id, origin="LIS", destination="OPO",
                departure="2023/01/01 10:00:00", arrival="2023/01/01 11:00:00",
                real_departure="2023/01/01 10:05:00", real_arrival="2023/01/01 11:05:00",
                seats="100"):
    return ";".join([flight_id, "TAP", "A320", seats, origin, destination, departure, arrival,
                     real_departure, real_arrival, "Pilot", "Copilot", ""])


def reservation_line(reservation_id, user_id, hotel_id="HTL1001", begin="2022/01/10",
                     end="2022/01/15", price="100", city_tax="10", rating="4",
                     breakfast="True", stars="4"):
    return ";".join([reservation_id, user_id, hotel_id, "Hotel Central", stars, city_tax,
                     "Rua B", begin, end, price, breakfast, "Single room", rating, ""])


def write_dataset(directory, users=(), flights=(), reservations=(), passengers=()):
    """Write the four dataset files into a directory."""
    contents = {
        "users": [USERS_HEADER] + list(users),
        "flights": [FLIGHTS_HEADER] + list(flights),
        "reservations": [RESERVATIONS_HEADER] + list(reservations),
        "passengers": [PASSENGERS_HEADER] + list(passengers),
    }
    for name, lines in contents.items():
        with open(os.path.join(directory, f"{name}.csv"), 'w', encoding='utf-8') as f:
            f.write("\n".join(lines) + "\n")


def run_query(database, query_types, text):
    """Parse and run one query; returns the output lines."""
    instance = query_parse(text, query_types)
    if instance is None:
        raise AssertionError(f"Query did not parse: {text}")
    writer = QueryWriter(None, instance.formatted)
    result = dispatch_single(database, instance, writer)
    if result:
        raise AssertionError(f"Query failed: {text}")
    return writer.get_lines()
