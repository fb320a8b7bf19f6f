from models.user import User
from models.store import Store
from models.item import Item
from models.recipe import Recipe
from models.blacklisted_token import BlacklistedToken
from sqlalchemy import create_engine, event
from sqlalchemy.orm import scoped_session, sessionmaker
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool
from models.base_model import Base

# Map model names for easy querying
classes = {
    "User": User,
    "Store": Store,
    "Item": Item,
    "Recipe": Recipe,
    "BlacklistedToken": BlacklistedToken,
}


class DBStorage:
    """Owns the engine and a thread-scoped session.

    Each request thread gets its own session from the scoped_session
    registry; close() removes it at app-context teardown.
    """
    __engine = None
    __session = None

    def configure(self, url: str, echo: bool = False):
        """Create the engine for url, replacing any previous one."""
        if self.__session is not None:
            self.__session.remove()
        if self.__engine is not None:
            self.__engine.dispose()

        if url.startswith("sqlite"):
            kwargs = {"connect_args": {"check_same_thread": False}}
            if url in ("sqlite://", "sqlite:///:memory:"):
                # one shared connection, otherwise every checkout sees an empty DB
                kwargs["poolclass"] = StaticPool
            self.__engine = create_engine(url, echo=echo, **kwargs)

            # Enable SQLite foreign keys (needed for ON DELETE RESTRICT)
            @event.listens_for(self.__engine, "connect")
            def _set_sqlite_pragma(dbapi_connection, connection_record):
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()
        else:
            self.__engine = create_engine(url, echo=echo, pool_pre_ping=True)
        self.__session = None

    def reload(self):
        """Create tables and start session"""
        if self.__engine is None:
            raise RuntimeError("DBStorage.configure() must be called before reload()")
        Base.metadata.create_all(self.__engine)
        session_factory = sessionmaker(bind=self.__engine, expire_on_commit=False)
        self.__session = scoped_session(session_factory)

    def new(self, obj):
        """Add object to session"""
        self.__session.add(obj)

    def save(self):
        """Commit session; a failed commit is rolled back and re-raised."""
        try:
            self.__session.commit()
        except SQLAlchemyError:
            self.__session.rollback()
            raise

    def delete(self, obj=None):
        """Delete object if exists (hard delete)"""
        if obj:
            self.__session.delete(obj)

    def get(self, cls, id):
        """Fetch one object by class and ID"""
        if cls in classes.values():
            return self.__session.get(cls, id)
        return None

    def count(self, cls):
        """Count rows of one model"""
        return self.__session.query(cls).count()

    def close(self):
        """Remove session (for API teardown)"""
        if self.__session is not None:
            self.__session.remove()

    def drop_all(self):
        Base.metadata.drop_all(self.__engine)

    # expose the SQLAlchemy session for advanced querying (joins, filters, etc.)
    def get_session(self):
        return self.__session
