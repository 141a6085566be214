"""Tabular persistence of sweep results."""
