"""Almacen: parts inventory ledger and cash-flow tracking service."""

__version__ = "1.0.0"
