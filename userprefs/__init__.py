"""
UserPrefs API - user directory and per-user settings service.
"""
__version__ = "1.0.0"
