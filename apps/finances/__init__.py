"""Finances app package.

Payments recorded against bookings and the revenue reports built on top
of them. Card processing is simulated; a real gateway integration would
replace ``services.process_payment``.
"""
