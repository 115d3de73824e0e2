"""Persistence for entities and their version snapshots."""
