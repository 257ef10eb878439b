# Schemas package init
"""
Homebase Backend: API Schemas
=============================

Pydantic models for request bodies and responses. JSON field names are
camelCase; snake_case names are accepted on input as well.
"""
