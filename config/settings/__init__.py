"""
Settings package for the dailyreport project.

By default, imports development settings.
For production, set DJANGO_SETTINGS_MODULE=config.settings.production
Tests run with config.settings.test.
"""

# Default to development settings when importing from config.settings
from .development import *
