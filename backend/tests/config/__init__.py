"""Shared pytest configuration: markers."""
