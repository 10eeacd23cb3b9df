"""
resource_hub.authz

Authorization core.

Responsibilities:
- Role policy table and ownership policy.
- Decision engine composing them behind the principal resolver.
- Structured denial reporting.
"""

# Package marker.
