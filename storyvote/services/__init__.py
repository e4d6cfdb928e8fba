"""
Business logic: session windows, story progress and the CRUD services.
"""
