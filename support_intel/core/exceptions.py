class SupportIntelError(Exception):
    """Base class for failures raised while building a report payload."""


class TableNotFoundError(SupportIntelError):
    def __init__(self, table_name: str):
        self.table_name = table_name
        super().__init__(f"Table not found: {table_name}")


class TableReadError(SupportIntelError):
    def __init__(self, table_name: str, reason: str = "source unavailable"):
        self.table_name = table_name
        self.reason = reason
        super().__init__(f"Unable to read table {table_name}: {reason}")
