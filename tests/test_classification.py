"""
Tests for folder pair classification.
"""

import pytest

from dupefolder.models import ComparisonMode, DuplicateType, Severity
from dupefolder.scanner import (
    calculate_similarity,
    classify_pair,
    is_exact_complete_duplicate,
    is_exact_files_only_duplicate,
    scan_folder,
)
from dupefolder.scanner.classification import round_half_away


QUICK = ComparisonMode.QUICK
DEEP = ComparisonMode.DEEP


class TestRounding:

    @pytest.mark.parametrize("value,expected", [
        (0.5, 1),
        (1.5, 2),
        (2.5, 3),
        (2.4, 2),
        (-1.5, -2),
        (0.0, 0),
    ])
    def test_half_away_from_zero(self, value, expected):
        assert round_half_away(value) == expected


class TestExactComplete:

    def test_identical_folders(self, content_factory):
        files = {'a.jpg': (100000, 800, 600), 'b.jpg': (200000, 1024, 768)}
        a = content_factory(files)
        b = content_factory(files)

        issue = classify_pair('/photos/A', a, '/backup/B', b, QUICK)
        assert issue.type is DuplicateType.EXACT_COMPLETE
        assert issue.severity is Severity.HIGH
        assert issue.similarity == 1.0
        assert issue.total_files == 2
        assert issue.duplicate_files == 2
        assert issue.wasted_space == 300000
        assert issue.primary_folder == '/photos/A'
        assert issue.duplicate_folder == '/backup/B'

    def test_file_order_does_not_matter(self, content_factory):
        a = content_factory({'a.jpg': (1, 1, 1), 'b.jpg': (2, 2, 2)})
        b = content_factory({'b.jpg': (2, 2, 2), 'a.jpg': (1, 1, 1)})
        assert is_exact_complete_duplicate(a, b, QUICK)

    def test_subfolders_must_match(self, content_factory):
        files = {'a.jpg': (1, 1, 1)}
        a = content_factory(files, subfolders=['empty'])
        b = content_factory(files)
        assert not is_exact_complete_duplicate(a, b, QUICK)
        assert classify_pair('/a', a, '/b', b, QUICK).type is DuplicateType.EXACT_FILES_ONLY

    def test_deep_mode_compares_hashes(self, content_factory):
        a = content_factory({'a.jpg': (10, 5, 5, 'h1')}, mode=DEEP)
        b = content_factory({'a.jpg': (10, 5, 5, 'h2')}, mode=DEEP)
        assert not is_exact_complete_duplicate(a, b, DEEP)
        assert is_exact_complete_duplicate(a, b, QUICK)

    def test_wasted_space_is_smaller_folder(self, content_factory):
        a = content_factory({'a.jpg': (10, 5, 5)})
        b = content_factory({'a.jpg': (10, 5, 5)})
        b.total_size = 5
        assert classify_pair('/a', a, '/b', b, QUICK).wasted_space == 5


class TestExactFilesOnly:

    def test_renamed_files(self, content_factory):
        a = content_factory({'a.jpg': (100, 10, 10), 'b.jpg': (200, 20, 20)})
        b = content_factory({'sub/x.jpg': (200, 20, 20), 'y.jpg': (100, 10, 10)}, subfolders=['sub'])

        issue = classify_pair('/a', a, '/b', b, QUICK)
        assert issue.type is DuplicateType.EXACT_FILES_ONLY
        assert issue.severity is Severity.MEDIUM
        assert issue.similarity == 1.0
        assert issue.duplicate_files == issue.total_files == 2
        assert issue.wasted_space == 300

    def test_repeated_files_count_separately(self, content_factory):
        a = content_factory({'1.jpg': (100, 10, 10), '2.jpg': (100, 10, 10)})
        b = content_factory({'1.jpg': (100, 10, 10), '2.jpg': (200, 20, 20)})
        assert not is_exact_files_only_duplicate(a, b, QUICK)
        # Jaccard over the key sets is 1/2
        assert classify_pair('/a', a, '/b', b, QUICK) is None

    def test_repeated_files_fall_back_to_partial(self, content_factory):
        a = content_factory({'1.jpg': (100, 10, 10), '2.jpg': (100, 10, 10)})
        b = content_factory({'1.jpg': (100, 10, 10)})

        issue = classify_pair('/a', a, '/b', b, QUICK)
        assert issue.type is DuplicateType.PARTIAL_DUPLICATE
        assert issue.similarity == 1.0
        assert issue.total_files == 2
        assert issue.duplicate_files == 2
        assert issue.wasted_space == 100


class TestPartialDuplicate:

    def _folders(self, content_factory, shared, only_a=0, only_b=0):
        files_a = {f'{i}.jpg': (1000 + i, 10, 10) for i in range(shared)}
        files_b = dict(files_a)
        for i in range(only_a):
            files_a[f'a{i}.jpg'] = (5000 + i, 10, 10)
        for i in range(only_b):
            files_b[f'b{i}.jpg'] = (9000 + i, 10, 10)
        return content_factory(files_a), content_factory(files_b)

    def test_exactly_at_threshold(self, content_factory):
        a, b = self._folders(content_factory, shared=9, only_a=1)
        assert calculate_similarity(a, b, QUICK) == pytest.approx(0.9)

        issue = classify_pair('/a', a, '/b', b, QUICK)
        assert issue.type is DuplicateType.PARTIAL_DUPLICATE
        assert issue.severity is Severity.LOW
        assert issue.similarity_percent == 90
        assert issue.total_files == 10
        assert issue.duplicate_files == 9
        assert issue.wasted_space == round_half_away(0.9 * b.total_size)

    def test_below_threshold(self, content_factory):
        a, b = self._folders(content_factory, shared=9, only_a=1, only_b=1)
        assert calculate_similarity(a, b, QUICK) == pytest.approx(9 / 11)
        assert classify_pair('/a', a, '/b', b, QUICK) is None

    def test_one_third_overlap(self, content_factory):
        a, b = self._folders(content_factory, shared=1, only_a=1, only_b=1)
        assert calculate_similarity(a, b, QUICK) == pytest.approx(1 / 3)
        assert classify_pair('/a', a, '/b', b, QUICK) is None

    def test_custom_threshold(self, content_factory):
        a, b = self._folders(content_factory, shared=1, only_a=1, only_b=1)
        issue = classify_pair('/a', a, '/b', b, QUICK, threshold=0.3)
        assert issue.type is DuplicateType.PARTIAL_DUPLICATE
        assert issue.duplicate_files == 1


class TestSimilarity:

    def test_bounds(self, content_factory):
        a = content_factory({'a.jpg': (1, 1, 1)})
        b = content_factory({'b.jpg': (2, 2, 2)})
        assert calculate_similarity(a, b, QUICK) == 0.0
        assert calculate_similarity(a, a, QUICK) == 1.0

    def test_empty_folders(self, content_factory):
        empty = content_factory({})
        full = content_factory({'a.jpg': (1, 1, 1)})
        assert calculate_similarity(empty, content_factory({}), QUICK) == 1.0
        assert calculate_similarity(empty, full, QUICK) == 0.0
        assert calculate_similarity(full, empty, QUICK) == 0.0

    def test_symmetric(self, content_factory):
        a = content_factory({f'{i}.jpg': (i, 1, 1) for i in range(10)})
        b = content_factory({f'{i}.jpg': (i, 1, 1) for i in range(1, 11)})
        assert calculate_similarity(a, b, QUICK) == calculate_similarity(b, a, QUICK)


class TestClassifyPair:

    def test_same_path_is_never_an_issue(self, content_factory):
        a = content_factory({'a.jpg': (1, 1, 1)})
        assert classify_pair('/a', a, '/a', a, QUICK) is None

    def test_both_empty_is_not_an_issue(self, content_factory):
        assert classify_pair('/a', content_factory({}), '/b', content_factory({}), QUICK) is None

    def test_empty_with_subfolders_is_not_an_issue(self, content_factory):
        a = content_factory({}, subfolders=['x'])
        b = content_factory({}, subfolders=['x'])
        assert classify_pair('/a', a, '/b', b, QUICK) is None

    def test_one_empty_is_not_an_issue(self, content_factory):
        full = content_factory({'a.jpg': (1, 1, 1)})
        assert classify_pair('/a', content_factory({}), '/b', full, QUICK) is None

    def test_classification_is_symmetric(self, content_factory):
        a = content_factory({'a.jpg': (1, 1, 1), 'b.jpg': (2, 2, 2)})
        b = content_factory({'x.jpg': (2, 2, 2), 'y.jpg': (1, 1, 1)})
        forward = classify_pair('/a', a, '/b', b, QUICK)
        backward = classify_pair('/b', b, '/a', a, QUICK)
        assert forward.type is backward.type
        assert forward.similarity == backward.similarity
        assert forward.wasted_space == backward.wasted_space


class TestModeIsolation:
    """Deep mode must never report a stronger match than Quick mode."""

    def _write_pair(self, temp_dir):
        # Same size, no readable dimensions, different bytes
        for name, fill in (('left', b'\x01'), ('right', b'\x02')):
            folder = temp_dir / name
            folder.mkdir()
            (folder / 'frame.raw').write_bytes(fill * 4096)
        return temp_dir / 'left', temp_dir / 'right'

    def test_quick_matches_deep_does_not(self, temp_dir):
        left, right = self._write_pair(temp_dir)

        quick = classify_pair(
            str(left), scan_folder(left, QUICK),
            str(right), scan_folder(right, QUICK),
            QUICK,
        )
        deep = classify_pair(
            str(left), scan_folder(left, DEEP),
            str(right), scan_folder(right, DEEP),
            DEEP,
        )
        assert quick.type is DuplicateType.EXACT_COMPLETE
        assert deep is None

    def test_deep_never_stronger_than_quick(self, content_factory):
        a = content_factory({'a.jpg': (10, 5, 5, 'h1'), 'b.jpg': (20, 5, 5, 'h2')}, mode=DEEP)
        b = content_factory({'a.jpg': (10, 5, 5, 'h1'), 'b.jpg': (20, 5, 5, 'other')}, mode=DEEP)

        quick = classify_pair('/a', a, '/b', b, QUICK)
        deep = classify_pair('/a', a, '/b', b, DEEP)
        deep_strength = deep.type.strength if deep else 0
        assert quick.type.strength >= deep_strength
        assert quick.type is DuplicateType.EXACT_COMPLETE
        assert deep is None
