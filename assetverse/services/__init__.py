"""
Services Layer
Read-only query helpers used by routes for lists, searches and statistics.

Services should:
- Build filtered queries
- Never write or commit
"""
