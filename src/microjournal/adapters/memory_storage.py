"""In-memory key-value storage adapter."""


class MemoryStorage:
    """Dict-backed slot storage. Implements KeyValueStorage protocol."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.slots: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.slots.get(key)

    def set(self, key: str, value: str) -> None:
        self.slots[key] = value
