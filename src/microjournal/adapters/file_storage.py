"""File-based key-value storage adapter."""

from pathlib import Path


class FileStorage:
    """
    File-based slot storage.

    Implements KeyValueStorage protocol. Each slot is a JSON file named
    after its key inside the data directory.
    """

    def __init__(self, data_dir: Path | str):
        self.data_dir = Path(data_dir).expanduser()
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _path_for_key(self, key: str) -> Path:
        """Get the file path for a slot key."""
        return self.data_dir / f"{key}.json"

    def get(self, key: str) -> str | None:
        """Read a slot. Returns None if it has never been written."""
        path = self._path_for_key(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        """Overwrite a slot, replacing the file in one step."""
        path = self._path_for_key(key)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(value, encoding="utf-8")
        tmp.replace(path)
