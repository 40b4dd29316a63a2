"""Courseware API: courses, ordered chapters and lessons, lesson progress and achievements."""

__version__ = "1.0.0"
