"""
Infrastructure layer for the BlytzWork marketplace API.

This layer contains the implementation details for external systems integration:
- Database (SQLAlchemy with PostgreSQL, Alembic migrations)
- Authentication (Firebase Admin)
- Payments (Stripe)
- File Storage (Cloudflare R2 through boto3)
- Rate limiting (Redis or in-memory)

The infrastructure layer implements interfaces defined in the domain layer,
following the Dependency Inversion Principle of Clean Architecture.
"""
