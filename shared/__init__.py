"""
Shared Kernel

Building blocks shared by every HotelHub app: value objects for money and
stay periods, domain errors and API pagination.
"""
