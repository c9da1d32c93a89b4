"""Hotels app package.

Holds the hotel catalogue browsed by guests: search, category listings
(popular, recommended, nearby, latest), featured hotels and search
suggestions. Administrators maintain the catalogue through the same API.
"""
