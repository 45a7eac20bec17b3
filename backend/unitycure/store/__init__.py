from unitycure.store.handle import MySQLStore, SQLiteStore, StoreHandle
from unitycure.store.initializer import initialize

__all__ = ["MySQLStore", "SQLiteStore", "StoreHandle", "initialize"]
