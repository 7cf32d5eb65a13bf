class LedgerError(ValueError):
    """Base class for inventory ledger failures the API layer can translate."""


class NotFoundError(LedgerError):
    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found")


class DuplicateError(LedgerError):
    def __init__(self, entity: str, field: str, value: str):
        self.entity = entity
        self.field = field
        self.value = value
        super().__init__(f"{entity} with {field} '{value}' already exists")
