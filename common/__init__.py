"""Shared constants, types, errors, logging and address resolution."""
