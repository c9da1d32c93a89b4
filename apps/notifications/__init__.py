"""Notifications app package.

Persists the email and SMS messages sent to guests (booking and
reservation confirmations, cancellations, admin broadcasts) and delivers
them either immediately or from the periodic pending queue processor.
"""
