"""
Unit tests for core.models module.
"""
import pytest
from core.models import LeafEntry, SyncContext, SyncStats, SyncResult


class TestLeafEntry:
    """Tests for LeafEntry dataclass."""

    def test_path_string(self):
        entry = LeafEntry(path=('causes', 0, 'title'), value='Drought', content_hash='h')

        assert entry.path_string == 'causes[0].title'
        assert entry.section == 'causes'

    def test_hashable(self):
        """Test entries can key dictionaries."""
        entry = LeafEntry(path=('title',), value='x', content_hash='h')
        assert {entry: 'y'}[entry] == 'y'

    def test_empty_path_section(self):
        assert LeafEntry(path=(), value='x', content_hash='h').section == ''


class TestSyncStats:
    """Tests for SyncStats dataclass."""

    def test_default_values(self):
        stats = SyncStats()
        assert stats.to_dict() == {'total': 0, 'changed': 0, 'translated': 0, 'failed': 0}

    @pytest.mark.parametrize("counts,outcome", [
        ((10, 0, 0, 0), 'up_to_date'),
        ((10, 4, 4, 0), 'complete'),
        ((10, 4, 3, 1), 'partial'),
        ((10, 4, 0, 4), 'failed'),
    ])
    def test_outcome(self, counts, outcome):
        total, changed, translated, failed = counts
        stats = SyncStats(total=total, changed=changed, translated=translated, failed=failed)
        assert stats.outcome == outcome


class TestSyncResult:
    """Tests for SyncResult dataclass."""

    def test_default_stats_independent(self):
        first = SyncResult(translated_document={})
        second = SyncResult(translated_document={})

        first.stats.failed += 1
        assert second.stats.failed == 0

    def test_context_frozen(self):
        context = SyncContext('doc-1', 'en', 'si')
        with pytest.raises(AttributeError):
            context.document_id = 'other'
