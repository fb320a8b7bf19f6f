from models.db_storage import DBStorage

# Process-wide storage; create_app() configures the engine and creates tables
storage = DBStorage()
