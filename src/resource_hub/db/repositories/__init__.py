"""
resource_hub.db.repositories

Session-bound repositories. `UserRepo` doubles as the Principal Store and
`SqlRecordStore` as the Record Store consumed by the authorization engine.
"""
