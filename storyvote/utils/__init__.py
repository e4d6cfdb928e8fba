"""
Shared utilities: configuration, logging, database, responses and request helpers.
"""
