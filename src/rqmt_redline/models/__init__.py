"""Pydantic models for entities, snapshots and redline results."""
