"""
Unit tests for sync.reconciler module.
"""
import copy

import pytest

from core.classifier import FieldClassifier
from core.document import index_leaves
from sync.reconciler import (
    apply_fallback,
    deep_merge,
    overlay_structural,
    structural_clone,
    write_back
)


@pytest.fixture
def classifier():
    return FieldClassifier()


class TestStructuralClone:
    """Tests for structural_clone."""

    def test_blanks_text_keeps_structure(self, classifier, project_document):
        clone = structural_clone(project_document, classifier)

        assert clone['projectIdea']['projectTitle'] == ''
        assert clone['projectIdea']['projectAcronym'] == 'WATSCAR'
        assert clone['risks'][0]['likelihood'] == 'High'
        assert clone['risks'][0]['title'] == ''
        assert clone['activities'][0]['tasks'][0]['dependencies'] == [
            {'predecessorId': 'T0.1', 'type': 'FS'}
        ]
        assert clone['budget'] == {'total': 125000, 'approved': True, 'note': None}

    def test_source_untouched(self, classifier, project_document):
        before = copy.deepcopy(project_document)
        structural_clone(project_document, classifier)
        assert project_document == before


class TestOverlayStructural:
    """Tests for overlay_structural."""

    def test_copies_structural_keeps_text(self, classifier):
        source = {'title': 'Drought', 'likelihood': 'High', 'score': 3}
        target = {'title': 'Suša', 'likelihood': 'Low', 'score': 1}

        overlay_structural(source, target, classifier)

        assert target == {'title': 'Suša', 'likelihood': 'High', 'score': 3}

    def test_pads_lists_and_creates_containers(self, classifier):
        source = {'causes': [{'id': 'C1', 'title': 'A'}, {'id': 'C2', 'title': 'B'}]}
        target = {'causes': [{'title': 'a'}]}

        overlay_structural(source, target, classifier)

        assert target == {'causes': [{'id': 'C1', 'title': 'a'}, {'id': 'C2', 'title': ''}]}

    def test_replaces_mistyped_container(self, classifier):
        source = {'risks': [{'category': 'Social'}]}
        target = {'risks': 'not a list'}

        overlay_structural(source, target, classifier)

        assert target == {'risks': [{'category': 'Social'}]}

    def test_value_structural_under_any_key(self, classifier):
        source = {'links': ['SS', 'free text']}
        target = {'links': [None, 'prosto besedilo']}

        overlay_structural(source, target, classifier)

        assert target == {'links': ['SS', 'prosto besedilo']}

    def test_keys_missing_from_source_removed(self, classifier):
        target = {'title': 'x', 'notes': 'only in target'}
        overlay_structural({'title': 'y'}, target, classifier)
        assert target == {'title': 'x'}

    def test_lists_shrink_with_source(self, classifier):
        """Test items deleted from source disappear from target."""
        source = {'causes': [{'title': 'Drought'}]}
        target = {'causes': [{'title': 'Suša'}, {'title': 'Poplave'}]}

        overlay_structural(source, target, classifier)

        assert target == {'causes': [{'title': 'Suša'}]}

    def test_cleared_source_text_clears_target(self, classifier):
        target = {'summary': 'Stari povzetek', 'note': 'Opomba'}
        overlay_structural({'summary': '', 'note': None}, target, classifier)
        assert target == {'summary': '', 'note': None}

    def test_container_in_text_slot_reset(self, classifier):
        target = {'title': {'stale': 'x'}, 'items': [['x']]}
        overlay_structural({'title': 'Plan', 'items': ['Step']}, target, classifier)
        assert target == {'title': '', 'items': ['']}

    def test_target_matches_source_leaf_addresses(self, classifier, project_document):
        target = {
            'risks': [{'title': 'a'}, {'title': 'b'}],
            'extra': {'title': 'c'},
        }

        overlay_structural(project_document, target, classifier)
        write_back(target, {leaf: 't' for leaf in index_leaves(project_document)})

        assert sorted(leaf.path_string for leaf in index_leaves(target)) == sorted(
            leaf.path_string for leaf in index_leaves(project_document)
        )


class TestWriteBackAndFallback:
    """Tests for write_back and apply_fallback."""

    def test_write_back(self):
        source = {'causes': [{'title': 'Drought'}]}
        entry = index_leaves(source)[0]
        target = {}

        assert write_back(target, {entry: 'Suša'}) == 1
        assert target == {'causes': [{'title': 'Suša'}]}

    def test_fallback_keeps_existing_text(self):
        entries = index_leaves({'title': 'New title', 'summary': 'New summary'})
        target = {'title': 'Stari naslov', 'summary': '  '}

        filled = apply_fallback(target, entries)

        assert filled == 1
        assert target == {'title': 'Stari naslov', 'summary': 'New summary'}


class TestDeepMerge:
    """Tests for deep_merge."""

    def test_none_sides(self):
        assert deep_merge(None, {'a': 1}) == {'a': 1}
        assert deep_merge({'a': 1}, None) == {'a': 1}

    def test_non_blank_original_wins(self):
        original = {'title': 'Mine', 'summary': ''}
        generated = {'title': 'Generated', 'summary': 'Generated summary', 'extra': 'x'}

        assert deep_merge(original, generated) == {
            'title': 'Mine', 'summary': 'Generated summary', 'extra': 'x'
        }

    def test_lists_merge_by_position(self):
        original = [{'title': 'Mine'}, {'title': ''}]
        generated = [{'title': 'G1'}, {'title': 'G2'}, {'title': 'G3'}]

        assert deep_merge(original, generated) == [
            {'title': 'Mine'}, {'title': 'G2'}, {'title': 'G3'}
        ]

    def test_inputs_not_modified(self):
        original = {'items': [{'a': ''}]}
        generated = {'items': [{'a': 'x'}]}

        merged = deep_merge(original, generated)
        merged['items'][0]['a'] = 'changed'

        assert original == {'items': [{'a': ''}]}
        assert generated == {'items': [{'a': 'x'}]}

    def test_type_mismatch_keeps_original(self):
        assert deep_merge({'a': 1}, ['x']) == {'a': 1}
        assert deep_merge(5, 7) == 5
