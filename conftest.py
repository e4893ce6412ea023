"""
Pytest configuration file.

Tests run with RUN_ENV=test so that a .env.test file, when present,
overrides the base .env before Django settings are loaded.
"""
import os

os.environ.setdefault("RUN_ENV", "test")
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "webmail_service.settings")
