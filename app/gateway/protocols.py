"""
Protocol definitions for collaborators owned by the ticketing platform.

The gateway never imports ticketing models directly. It receives an
object implementing these protocols instead, which keeps the gateway
testable with plain stubs.

Available Protocols:
    TicketRepository: Ticket counts per reservation

Usage:
    from gateway.protocols import TicketRepository

    class ReservationTickets:
        def count_tickets_in_reservation(self, reservation_id: str) -> int:
            return Ticket.objects.filter(reservation_id=reservation_id).count()

    manager = StripeManager(ticket_repository=ReservationTickets())
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TicketRepository(Protocol):
    """
    Protocol for the ticket/reservation store.

    Used to scale the per-ticket minimum platform fee and to describe
    the charge.
    """

    def count_tickets_in_reservation(self, reservation_id: str) -> int:
        """
        Count the tickets held by a reservation.

        Args:
            reservation_id: Reservation identifier

        Returns:
            Number of tickets (0 if the reservation has none)
        """
        ...
