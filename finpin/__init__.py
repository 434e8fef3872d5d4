"""Finpin trip budget backend."""
