"""
resource_hub.services

Operation executors. They run only after the authorization engine allowed the
request and receive the principal and decision as explicit arguments.
"""
