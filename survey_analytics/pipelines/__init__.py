"""Pipelines: data sourcing, polling and reconciliation around the scoring core."""
