"""Scoring, workflow and lead-board services built on the pure domain model."""
