"""Personal health planning: derive hydration, exercise, sleep and advice from a profile.

This package contains the business logic and domain models,
isolated from external dependencies for easy testing and reasoning.
"""
