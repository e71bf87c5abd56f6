"""
Unit tests for sync.hash_store module.
"""
from core.document import index_leaves
from data.database import DatabaseManager
from sync.hash_store import HashStore


class TestHashStore:
    """Tests for HashStore."""

    def test_load_empty(self, hash_store):
        assert hash_store.load('doc-1', 'en', 'si') == {}

    def test_save_and_load(self, hash_store):
        entries = index_leaves({'title': 'Water', 'causes': [{'title': 'Drought'}]})

        written = hash_store.save('doc-1', 'en', 'si', entries)

        assert written == 2
        assert hash_store.load('doc-1', 'en', 'si') == {
            e.path_string: e.content_hash for e in entries
        }

    def test_save_nothing(self, hash_store):
        assert hash_store.save('doc-1', 'en', 'si', []) == 0

    def test_save_overwrites(self, hash_store):
        hash_store.save('doc-1', 'en', 'si', index_leaves({'title': 'Old'}))
        new = index_leaves({'title': 'New'})
        hash_store.save('doc-1', 'en', 'si', new)

        assert hash_store.load('doc-1', 'en', 'si') == {'title': new[0].content_hash}

    def test_unavailable_store(self):
        """Test a store without tables reads as empty and writes nothing."""
        manager = DatabaseManager("sqlite://")
        store = HashStore(manager)

        try:
            assert store.load('doc-1', 'en', 'si') == {}
            assert store.save('doc-1', 'en', 'si', index_leaves({'title': 'A'})) == 0
        finally:
            manager.engine.dispose()
