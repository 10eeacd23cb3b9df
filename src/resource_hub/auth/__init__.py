"""
resource_hub.auth

Authentication package.

Responsibilities:
- Principal and role models.
- JWT helpers and the JWT credential verifier.
- Principal resolution and the FastAPI authorization dependency.
"""

# Package marker.
