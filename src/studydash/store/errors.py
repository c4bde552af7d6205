"""Store exceptions.

Raised by the entity store and the repository; translated to HTTP responses
by the web layer.
"""


class StoreError(Exception):
    """Base error for entity store operations."""


class NotFoundError(StoreError):
    """Raised when a referenced record does not exist."""

    def __init__(self, entity: str, entity_id: int):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")
