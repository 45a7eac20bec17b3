class StoreUnavailableException(Exception):
    def __init__(self, reason: str, details: dict = None):
        self.reason = reason
        self.details = details or {}
        super().__init__(f"No data store available: {reason}")


class TableAbsentException(Exception):
    def __init__(self, table: str):
        self.table = table
        super().__init__(f"Table {table} not found")


class RowTransformException(Exception):
    def __init__(self, table: str, reason: str):
        self.table = table
        self.reason = reason
        super().__init__(f"{table}: {reason}")


class UserExistsException(Exception):
    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"User already exists: {identifier}")


class BackupFileNotFoundException(FileNotFoundError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Backup file not found: {path}")


class BackupFileCorruptException(Exception):
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Backup file {path} is corrupt: {reason}")
