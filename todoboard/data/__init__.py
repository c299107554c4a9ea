"""
Schema initialisation and seed data.
"""
from todoboard.data.initialiser import DatabaseInitialiser, initialise_database

__all__ = ["DatabaseInitialiser", "initialise_database"]
