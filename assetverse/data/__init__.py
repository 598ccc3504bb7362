"""
Data layer
SQLAlchemy models for users, assets, requests, assignments and affiliations
"""
