"""Skill extraction, weighted job matching and application analytics."""

__version__ = "0.1.0"
