"""
resource_hub.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- Request-context middleware for log correlation.
"""

# Package marker.
