"""
Database Module

Aggregate of the entity managers. All writes go through the Database so
that references between entities are checked before a row becomes
visible; query code only reads the managers.
"""

from typing import List

from entity_module import User, Flight, Reservation, user_is_active
from manager_module import UserManager, FlightManager, ReservationManager, IntegrityError

# Constants
REFERENCE_DATE = 20231001  # 2023/10/01, "today" for user ages

__all__ = ['Database', 'IntegrityError', 'REFERENCE_DATE']


class Database:
    """In-memory store of users, flights and reservations."""

    def __init__(self, reference_date: int = REFERENCE_DATE):
        self.reference_date = reference_date
        self.users = UserManager()
        self.flights = FlightManager()
        self.reservations = ReservationManager()

    def _require_active_user(self, user_id: str) -> User:
        user = self.users.get_by_id(user_id)
        if user is None:
            raise IntegrityError(f"Unknown user: {user_id}")
        if not user_is_active(user):
            raise IntegrityError(f"Inactive user: {user_id}")
        return user

    def add_user(self, user: User) -> User:
        return self.users.add(user)

    def _is_active_user(self, user_id: str) -> bool:
        user = self.users.get_by_id(user_id)
        return user is not None and user_is_active(user)

    def add_flight(self, flight: Flight, passenger_user_ids: List[str]) -> Flight:
        """
        Add a flight together with its passengers.

        Ids that do not name an existing active user are dropped one by
        one and the flight is kept. Either the flight and every remaining
        passenger link become visible, or nothing does.

        Args:
            flight: Flight row; its passenger count is set from the kept ids
            passenger_user_ids: One user id per passenger row

        Raises:
            IntegrityError: On a repeated flight id, or more passengers than seats
        """
        if self.flights.get_by_id(flight.id) is not None:
            raise IntegrityError(f"Repeated flight id: {flight.id}")
        passengers = [user_id for user_id in passenger_user_ids if self._is_active_user(user_id)]
        if len(passengers) > flight.total_seats:
            raise IntegrityError(
                f"Flight {flight.id} has {len(passengers)} passengers "
                f"for {flight.total_seats} seats")

        flight.passengers = len(passengers)
        stored = self.flights.add(flight)
        for user_id in passengers:
            self.users.add_flight_to_user(user_id, stored.id)
        return stored

    def add_reservation(self, reservation: Reservation) -> Reservation:
        """
        Add a reservation owned by an existing, active user.

        Raises:
            IntegrityError: On a repeated id or a missing or inactive user
        """
        self._require_active_user(reservation.user_id)
        stored = self.reservations.add(reservation)
        self.users.add_reservation_to_user(stored.user_id, stored.id)
        return stored

    def free(self):
        """Drop every row and index at once."""
        self.users = UserManager()
        self.flights = FlightManager()
        self.reservations = ReservationManager()
