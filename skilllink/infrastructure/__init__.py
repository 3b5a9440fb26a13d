"""
Infrastructure layer for the Skill Link marketplace.

This layer contains the implementation details for external systems integration:
- Database (SQLAlchemy)
- Authentication (JWT and bcrypt)
- Email delivery (SMTP with Jinja2 templates)
- HTTP API (FastAPI routers and error handlers)

The infrastructure layer implements interfaces defined in the domain layer,
following the Dependency Inversion Principle of Clean Architecture.
"""
