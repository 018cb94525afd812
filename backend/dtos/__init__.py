"""
Data Transfer Objects (DTOs) Layer

This package contains DTOs that decouple the API layer from the database models.
Relational fields on transfer objects hold raw identifiers unless a filtered
listing asked for the relation, in which case they hold the related row's
columns.

Structure:
- request/: envelopes and filter requests coming in
- response/: envelopes going out
- transfer/: per-entity transfer objects
- internal/: per-entity wiring used by the service factory
"""
