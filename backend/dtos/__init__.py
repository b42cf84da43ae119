"""
Data Transfer Objects (DTOs) Layer

This package contains DTOs that decouple the API layer from the database models
and the job store format.

Structure:
- request/: DTOs for incoming API requests
- response/: DTOs for outgoing API responses
- internal/: DTOs for service-to-service communication and job persistence
"""
