"""Bookings app package.

Hotel level bookings made from the mobile app. A booking snapshots the
hotel's name and nightly price, computes price x nights x rooms and moves
through pending, confirmed, checked_in and completed, with cancellation
allowed until the stay is completed. Periodic tasks expire unpaid holds
and complete finished stays.
"""
