"""User management microservice.

Exposes create/read/update/delete HTTP endpoints for users, backed by a
service layer enforcing email and username uniqueness and a SQLModel
repository.
"""

__version__ = "0.1.0"
