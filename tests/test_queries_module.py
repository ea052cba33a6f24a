"""
Tests for the query catalogue (Q01 to Q10).

Each test class builds a small database by hand and checks the exact
delimited output of its queries.
"""

import unittest
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from database_module import Database
from queries_module import query_type_list_create, median, reservation_revenue_in_range
from date_module import date_from_string
from dataset_helpers import make_user, make_flight, make_reservation, run_query


def build_database():
    """
    Users:        u1 Ana, u2 Anabela, u3 Álvaro, u4 Bob, u5 Anastácia (inactive)
    Flights:      1 LIS->OPO 2022/01/15 (u1, u2), 2 LIS->OPO 2023/06/01 (u1),
                  3 OPO->LIS 2022/01/20 (u1)
    Reservations: 1, 3 by u1 and 4 by u2 at HTL1001; 5 by u4 at HTL2002
    """
    database = Database()
    database.add_user(make_user("u1", "Ana"))
    database.add_user(make_user("u2", "Anabela", creation="2022/03/05 09:00:00"))
    database.add_user(make_user("u3", "Álvaro"))
    database.add_user(make_user("u4", "Bob"))
    database.add_user(make_user("u5", "Anastácia", active=False))

    database.add_flight(make_flight(1, "LIS", "OPO", "2022/01/15 10:00:00",
                                    "2022/01/15 11:00:00", "2022/01/15 10:10:00"),
                        ["u1", "u2"])
    database.add_flight(make_flight(2, "LIS", "OPO", "2023/06/01 10:00:00",
                                    "2023/06/01 11:00:00"), ["u1"])
    database.add_flight(make_flight(3, "OPO", "LIS", "2022/01/20 08:00:00",
                                    "2022/01/20 09:00:00"), ["u1"])

    database.add_reservation(make_reservation(1, "u1", 1001, "2022/01/10", "2022/01/15",
                                              price=100, city_tax=10, rating=4))
    database.add_reservation(make_reservation(3, "u1", 1001, "2022/01/15", "2022/01/20",
                                              price=80, rating=0))
    database.add_reservation(make_reservation(4, "u2", 1001, "2022/01/10", "2022/01/12",
                                              price=120, rating=2))
    database.add_reservation(make_reservation(5, "u4", 2002, "2023/01/01", "2023/01/03",
                                              rating=0))
    return database


class QueryTestCase(unittest.TestCase):

    def setUp(self):
        self.database = build_database()
        self.query_types = query_type_list_create()

    def query(self, text):
        return run_query(self.database, self.query_types, text)


class TestQ01(QueryTestCase):
    """Test entity details."""

    def test_reservation_then_flight(self):
        """The argument format decides which entity is shown."""
        self.assertEqual(self.query("1 Book0000000001"),
                         ["HTL1001;Hotel Central;4;2022/01/10;2022/01/15;False;5;550.000"])
        self.assertEqual(self.query("1 000000000001"),
                         ["TAP;A320;LIS;OPO;2022/01/15 10:00:00;2022/01/15 11:00:00;2;600"])

    def test_user(self):
        self.assertEqual(self.query("1 u1"), ["Ana;M;33;PT;PT123456;3;2;950.000"])

    def test_formatted(self):
        lines = self.query("1F Book0000000001")
        self.assertEqual(lines[0], "--- 1 ---")
        self.assertEqual(lines[1], "hotel_id: HTL1001")
        self.assertEqual(lines[-1], "total_price: 550.000")

    def test_missing_or_inactive(self):
        self.assertEqual(self.query("1 u5"), [])
        self.assertEqual(self.query("1 nobody"), [])
        self.assertEqual(self.query("1 Book0000000099"), [])
        self.assertEqual(self.query("1 0000000099"), [])


class TestQ02(QueryTestCase):
    """Test user history."""

    def test_all_items(self):
        self.assertEqual(self.query("2 u1"), [
            "0000000002;2023/06/01;flight",
            "0000000003;2022/01/20;flight",
            "0000000001;2022/01/15;flight",
            "Book0000000003;2022/01/15;reservation",
            "Book0000000001;2022/01/10;reservation",
        ])

    def test_filters(self):
        self.assertEqual(self.query("2 u1 flights"), [
            "0000000002;2023/06/01", "0000000003;2022/01/20", "0000000001;2022/01/15",
        ])
        self.assertEqual(self.query("2 u1 reservations"), [
            "Book0000000003;2022/01/15", "Book0000000001;2022/01/10",
        ])

    def test_inactive_user(self):
        self.assertEqual(self.query("2 u5"), [])
        self.assertEqual(self.query("2 u3"), [])


class TestQ03(QueryTestCase):
    """Test average hotel rating."""

    def test_unrated_excluded(self):
        self.assertEqual(self.query("3 HTL1001"), ["3.000"])

    def test_no_ratings(self):
        self.assertEqual(self.query("3 HTL2002"), [])
        self.assertEqual(self.query("3 HTL9999"), [])

    def test_matches_independent_average(self):
        ratings = [r.rating for r in self.database.reservations
                   if r.hotel_id == 1001 and r.rating > 0]
        self.assertEqual(self.query("3 HTL1001"), ["%.3f" % (sum(ratings) / len(ratings))])


class TestQ04(QueryTestCase):
    """Test hotel reservation listings."""

    def test_order(self):
        """Newest begin date first; equal dates by ascending id."""
        self.assertEqual(self.query("4 HTL1001"), [
            "Book0000000003;2022/01/15;2022/01/20;u1;0;400.000",
            "Book0000000001;2022/01/10;2022/01/15;u1;4;550.000",
            "Book0000000004;2022/01/10;2022/01/12;u2;2;240.000",
        ])

    def test_unknown_hotel(self):
        self.assertEqual(self.query("4 HTL9999"), [])


class TestQ05(QueryTestCase):
    """Test departures from an airport in a range."""

    def test_overlapping_ranges(self):
        self.assertEqual(self.query('5 LIS "2022/01/01 00:00:00" "2022/12/31 23:59:59"'),
                         ["0000000001;2022/01/15 10:00:00;OPO;TAP;A320"])
        self.assertEqual(self.query('5 LIS "2021/01/01 00:00:00" "2024/01/01 00:00:00"'), [
            "0000000002;2023/06/01 10:00:00;OPO;TAP;A320",
            "0000000001;2022/01/15 10:00:00;OPO;TAP;A320",
        ])

    def test_inclusive_bounds(self):
        self.assertEqual(len(self.query('5 LIS "2022/01/15 10:00:00" "2022/01/15 10:00:00"')), 1)
        self.assertEqual(self.query('5 LIS "2022/01/15 10:00:01" "2023/06/01 09:59:59"'), [])

    def test_other_airport(self):
        self.assertEqual(self.query('5 OPO "2022/01/01 00:00:00" "2022/12/31 23:59:59"'),
                         ["0000000003;2022/01/20 08:00:00;LIS;TAP;A320"])
        self.assertEqual(self.query('5 FAO "2022/01/01 00:00:00" "2022/12/31 23:59:59"'), [])


class TestQ06(unittest.TestCase):
    """Test busiest airports of a year."""

    def setUp(self):
        self.database = Database()
        for flight_id, origin, destination, departure, passengers in (
                (1, "AAA", "BBB", "2023/03/01 10:00:00", 100),
                (2, "CCC", "DDD", "2023/04/01 10:00:00", 50),
                (3, "EEE", "FFF", "2022/04/01 10:00:00", 500)):
            flight = make_flight(flight_id, origin, destination, departure,
                                 departure.replace("10:00", "12:00"))
            flight.passengers = passengers
            self.database.flights.add(flight)
        self.query_types = query_type_list_create()

    def test_tie_break(self):
        """Equal counts are listed by ascending airport code."""
        self.assertEqual(run_query(self.database, self.query_types, "6 2023 5"),
                         ["AAA;100", "BBB;100", "CCC;50", "DDD;50"])
        self.assertEqual(run_query(self.database, self.query_types, "6 2023 1"), ["AAA;100"])

    def test_empty_year(self):
        self.assertEqual(run_query(self.database, self.query_types, "6 2021 3"), [])


class TestQ07(unittest.TestCase):
    """Test airports by median delay."""

    def setUp(self):
        self.database = Database()
        self.next_id = 1
        for delay in (1, 3, 5, 7):
            self.add_flight("AAA", delay)
        self.add_flight("BBB", 10)
        self.add_flight("CCC", 4)
        self.query_types = query_type_list_create()

    def add_flight(self, origin, delay):
        self.database.flights.add(make_flight(self.next_id, origin, "ZZZ", "2023/01/01 10:00:00",
                                              "2023/01/01 12:00:00",
                                              "2023/01/01 10:00:%02d" % delay))
        self.next_id += 1

    def test_median_parity(self):
        self.assertEqual(run_query(self.database, self.query_types, "7 5"),
                         ["BBB;10", "AAA;4", "CCC;4"])
        self.add_flight("AAA", 9)
        self.assertEqual(run_query(self.database, self.query_types, "7 2"),
                         ["BBB;10", "AAA;5"])

    def test_median_floor(self):
        self.assertEqual(median([1, 2]), 1)
        self.assertEqual(median([-3, 0]), -2)
        self.assertEqual(median([7, 1, 3, 5]), 4)
        self.assertEqual(median([5]), 5)


class TestQ08(unittest.TestCase):
    """Test hotel revenue."""

    def setUp(self):
        self.database = Database()
        self.database.add_user(make_user("u1"))
        self.database.add_reservation(make_reservation(1, "u1", 1001, "2022/01/10",
                                                       "2022/01/15", price=100))
        self.query_types = query_type_list_create()

    def test_boundary_day(self):
        """The check-out day earns nothing."""
        self.assertEqual(run_query(self.database, self.query_types,
                                   "8 HTL1001 2022/01/12 2022/01/13"), ["200"])
        self.assertEqual(run_query(self.database, self.query_types,
                                   "8 HTL1001 2022/01/15 2022/01/20"), ["0"])
        self.assertEqual(run_query(self.database, self.query_types,
                                   "8 HTL1001 2022/01/01 2022/12/31"), ["500"])

    def test_linear_in_overlap(self):
        one = reservation_revenue_in_range(100, 20220110, 20220115, 20220112, 20220112)
        two = reservation_revenue_in_range(100, 20220110, 20220115, 20220112, 20220113)
        self.assertEqual(two, 2 * one)

    def test_month_boundary(self):
        revenue = reservation_revenue_in_range(10, date_from_string("2022/01/30"),
                                               date_from_string("2022/02/02"),
                                               date_from_string("2022/01/01"),
                                               date_from_string("2022/12/31"))
        self.assertEqual(revenue, 30)

    def test_february_stay(self):
        self.database.add_reservation(make_reservation(2, "u1", 3003, "2023/02/27",
                                                       "2023/03/02", price=10))
        self.assertEqual(run_query(self.database, self.query_types,
                                   "8 HTL3003 2023/01/01 2023/12/31"), ["60"])
        self.assertEqual(run_query(self.database, self.query_types,
                                   "8 HTL3003 2023/03/01 2023/03/31"), ["10"])
        self.assertEqual(run_query(self.database, self.query_types,
                                   "8 HTL3003 2023/02/01 2023/02/28"), ["20"])


class TestQ09(QueryTestCase):
    """Test user name prefix search."""

    def test_prefix(self):
        self.assertEqual(self.query("9 An"), ["u1;Ana", "u2;Anabela"])
        self.assertEqual(self.query("9 Á"), ["u3;Álvaro"])
        self.assertEqual(self.query("9 Z"), [])

    def test_case_sensitive(self):
        self.assertEqual(self.query("9 an"), [])

    def test_collation(self):
        """Accented names sort with their base letters."""
        self.assertEqual(self.query('9 ""'), ["u3;Álvaro", "u1;Ana", "u2;Anabela", "u4;Bob"])


class TestQ10(QueryTestCase):
    """Test system statistics."""

    def test_years(self):
        self.assertEqual(self.query("10"), [
            "2020;4;0;0;0;0",
            "2022;1;2;3;2;3",
            "2023;0;1;1;1;1",
        ])

    def test_months(self):
        self.assertEqual(self.query("10 2022"), ["1;0;2;3;2;3", "3;1;0;0;0;0"])

    def test_days(self):
        self.assertEqual(self.query("10 2022 1"), [
            "10;0;0;0;0;2",
            "15;0;1;2;2;1",
            "20;0;1;1;1;0",
        ])

    def test_formatted(self):
        lines = self.query("10F 2022")
        self.assertEqual(lines[:7], ["--- 1 ---", "month: 1", "users: 0", "flights: 2",
                                     "passengers: 3", "unique_passengers: 2", "reservations: 3"])


if __name__ == '__main__':
    unittest.main()
