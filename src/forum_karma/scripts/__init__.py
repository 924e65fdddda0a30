"""Operational scripts for the forum karma service."""
