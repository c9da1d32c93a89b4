"""Reservations app package.

Room level reservations run by the front desk: the availability check
that prevents overlapping stays in the same room, creation, cancellation,
check-in, check-out and no-show handling. Availability checks lock the
competing rows inside a transaction when the database supports it.
"""
