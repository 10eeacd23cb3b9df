"""
resource_hub.api.routers

HTTP routers (resources, users, dev auth, health).
"""
