"""Personality assessment scoring and career recommendation engine"""

__version__ = "1.0.0"
