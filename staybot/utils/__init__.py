"""Utility modules: dates, URL codec, locators, error capture."""
