"""Pydantic models for canaryctl."""
