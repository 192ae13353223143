"""Gilgrimi HTTP API."""
