"""Game domain services: deck, room registry, turns, scoring and elimination.

This package contains pure domain logic that is imported by the socket
handlers and HTTP routes, keeping transport concerns separated from core
game mechanics. Services mutate the ``Room`` they are handed and raise
``GameError`` subclasses on rule violations; callers hold the room lock.
"""
