"""Rooms app package: room type catalogue and the physical rooms of each hotel."""
