class _State:
    """Mutation counter shared by a graph and its derived indices."""

    def __init__(self):
        self.version = 0
        self._index_cache = {}

    def bump(self) -> int:
        self.version += 1
        self._index_cache.clear()
        return self.version

    def dirty_since(self, version: int) -> bool:
        return self.version > version

    def cached(self, name, build):
        """Return the index ``name`` for the current version, building it if needed."""
        entry = self._index_cache.get(name)
        if entry is None or self.dirty_since(entry[0]):
            entry = (self.version, build())
            self._index_cache[name] = entry
        return entry[1]
