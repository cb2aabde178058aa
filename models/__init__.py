from models.db_storage import DBStorage

# Process-wide storage; the app factory calls storage.reload() with its DATABASE_URL
storage = DBStorage()
