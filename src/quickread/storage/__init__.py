"""Persistence for recent uploads."""
