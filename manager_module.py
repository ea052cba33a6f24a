"""
Manager Module

One manager per entity kind. Each manager owns:
    - a row Pool holding every row it accepted
    - a StringPool holding copies of the rows' string fields
    - a primary-key map from id to row

The user manager additionally owns the user -> flights and
user -> reservations id lists, whose nodes share one pool.

Managers are build-once: rows are added during load and never removed.
"""

from dataclasses import replace
from typing import Any, Callable, Dict, Iterator, List, Optional

from entity_module import User, Flight, Reservation
from pool_module import (
    Pool, StringPool, IdLinkedListNode,
    id_linked_list_create_pool, id_linked_list_append, id_linked_list_iter,
    id_linked_list_length,
)

# Constants
USER_MANAGER_USERS_POOL_BLOCK_CAPACITY = 20000
USER_MANAGER_STRING_POOL_BLOCK_CAPACITY = 100000
FLIGHT_MANAGER_FLIGHTS_POOL_BLOCK_CAPACITY = 1000
FLIGHT_MANAGER_STRING_POOL_BLOCK_CAPACITY = 4096
RESERVATION_MANAGER_RESERVATIONS_POOL_BLOCK_CAPACITY = 20000
RESERVATION_MANAGER_STRING_POOL_BLOCK_CAPACITY = 4096


class IntegrityError(ValueError):
    """A row was rejected because it breaks a key or reference constraint."""


def _iterate(rows, callback: Callable[[Any, Any], int], user_data: Any) -> int:
    for row in rows:
        result = callback(row, user_data)
        if result:
            return result
    return 0


class UserManager:
    """Users by id, plus the per-user flight and reservation id lists."""

    def __init__(self):
        self.users = Pool(USER_MANAGER_USERS_POOL_BLOCK_CAPACITY)
        self.strings = StringPool(USER_MANAGER_STRING_POOL_BLOCK_CAPACITY)
        self.id_to_user: Dict[str, User] = {}

        self.list_nodes = id_linked_list_create_pool()
        self.flights_by_user: Dict[str, IdLinkedListNode] = {}
        self.reservations_by_user: Dict[str, IdLinkedListNode] = {}

    def add(self, user: User) -> User:
        """
        Store a copy of a user.

        Raises:
            IntegrityError: If a user with the same id already exists
        """
        if user.id in self.id_to_user:
            raise IntegrityError(f"Repeated user id: {user.id}")

        stored = self.users.put(replace(
            user,
            id=self.strings.put(user.id),
            name=self.strings.put(user.name),
            passport=self.strings.put(user.passport),
        ))
        self.id_to_user[stored.id] = stored
        return stored

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self.id_to_user.get(user_id)

    def add_flight_to_user(self, user_id: str, flight_id: int):
        """Link a flight to a user; repeated links are ignored."""
        if user_id not in self.id_to_user:
            raise IntegrityError(f"Unknown user: {user_id}")
        head = self.flights_by_user.get(user_id)
        self.flights_by_user[user_id] = id_linked_list_append(self.list_nodes, head, flight_id)

    def add_reservation_to_user(self, user_id: str, reservation_id: int):
        """Link a reservation to a user; repeated links are ignored."""
        if user_id not in self.id_to_user:
            raise IntegrityError(f"Unknown user: {user_id}")
        head = self.reservations_by_user.get(user_id)
        self.reservations_by_user[user_id] = id_linked_list_append(self.list_nodes, head,
                                                                   reservation_id)

    def get_flights_by_user(self, user_id: str) -> List[int]:
        """Flight ids of a user, in the order they were loaded."""
        return list(id_linked_list_iter(self.flights_by_user.get(user_id)))

    def get_reservations_by_user(self, user_id: str) -> List[int]:
        """Reservation ids of a user, in the order they were loaded."""
        return list(id_linked_list_iter(self.reservations_by_user.get(user_id)))

    def count_flights_by_user(self, user_id: str) -> int:
        return id_linked_list_length(self.flights_by_user.get(user_id))

    def count_reservations_by_user(self, user_id: str) -> int:
        return id_linked_list_length(self.reservations_by_user.get(user_id))

    def iter(self, callback: Callable[[User, Any], int], user_data: Any = None) -> int:
        """
        Call callback(user, user_data) for every user.

        Returns:
            The first non-zero callback result, or 0 after visiting all users
        """
        return _iterate(self.id_to_user.values(), callback, user_data)

    def iter_with_flights(self, callback: Callable[[User, List[int], Any], int],
                          user_data: Any = None) -> int:
        """Like iter(), but also passes each user's flight ids."""
        for user in self.id_to_user.values():
            result = callback(user, self.get_flights_by_user(user.id), user_data)
            if result:
                return result
        return 0

    def __iter__(self) -> Iterator[User]:
        return iter(self.id_to_user.values())

    def __len__(self) -> int:
        return len(self.id_to_user)


class FlightManager:
    """Flights by id."""

    def __init__(self):
        self.flights = Pool(FLIGHT_MANAGER_FLIGHTS_POOL_BLOCK_CAPACITY)
        # Airlines and plane models repeat a lot
        self.strings = StringPool(FLIGHT_MANAGER_STRING_POOL_BLOCK_CAPACITY, no_duplicates=True)
        self.id_to_flight: Dict[int, Flight] = {}

    def add(self, flight: Flight) -> Flight:
        """
        Store a copy of a flight.

        Raises:
            IntegrityError: If a flight with the same id already exists
        """
        if flight.id in self.id_to_flight:
            raise IntegrityError(f"Repeated flight id: {flight.id}")

        stored = self.flights.put(replace(
            flight,
            airline=self.strings.put(flight.airline),
            plane_model=self.strings.put(flight.plane_model),
        ))
        self.id_to_flight[stored.id] = stored
        return stored

    def get_by_id(self, flight_id: int) -> Optional[Flight]:
        return self.id_to_flight.get(flight_id)

    def iter(self, callback: Callable[[Flight, Any], int], user_data: Any = None) -> int:
        return _iterate(self.id_to_flight.values(), callback, user_data)

    def __iter__(self) -> Iterator[Flight]:
        return iter(self.id_to_flight.values())

    def __len__(self) -> int:
        return len(self.id_to_flight)


class ReservationManager:
    """Reservations by id."""

    def __init__(self):
        self.reservations = Pool(RESERVATION_MANAGER_RESERVATIONS_POOL_BLOCK_CAPACITY)
        # Hotel names repeat once per reservation
        self.strings = StringPool(RESERVATION_MANAGER_STRING_POOL_BLOCK_CAPACITY,
                                  no_duplicates=True)
        self.id_to_reservation: Dict[int, Reservation] = {}

    def add(self, reservation: Reservation) -> Reservation:
        """
        Store a copy of a reservation.

        Raises:
            IntegrityError: If a reservation with the same id already exists
        """
        if reservation.id in self.id_to_reservation:
            raise IntegrityError(f"Repeated reservation id: {reservation.id}")

        stored = self.reservations.put(replace(
            reservation,
            user_id=self.strings.put(reservation.user_id),
            hotel_name=self.strings.put(reservation.hotel_name),
        ))
        self.id_to_reservation[stored.id] = stored
        return stored

    def get_by_id(self, reservation_id: int) -> Optional[Reservation]:
        return self.id_to_reservation.get(reservation_id)

    def iter(self, callback: Callable[[Reservation, Any], int], user_data: Any = None) -> int:
        return _iterate(self.id_to_reservation.values(), callback, user_data)

    def __iter__(self) -> Iterator[Reservation]:
        return iter(self.id_to_reservation.values())

    def __len__(self) -> int:
        return len(self.id_to_reservation)
