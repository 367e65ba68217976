"""Domain layer for fintrack application.

Services are imported from their modules directly (e.g.
``fintrack.domain.csv_import``) so that the database layer can depend on
``fintrack.domain.entities`` without an import cycle.
"""
