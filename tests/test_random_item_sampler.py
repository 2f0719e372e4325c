"""Tests for RandomItemSampler with mocked host services."""

from collections import Counter

import pytest

from random_sample.errors import HostServiceError
from random_sample.models import RandomSampleRequest
from random_sample.samplers import (
    FALLBACK_ITEM_TYPES,
    SAMPLE_DTO_OPTIONS,
    RandomItemSampler,
    get_include_item_types,
)

from conftest import make_items


# ============== Fixtures ==============

@pytest.fixture
def sampler(library_manager, dto_service):
    return RandomItemSampler(library_manager, dto_service, random_seed=7)


def make_request(library_ids, size=20, movies=True, tv=True, music=False):
    return RandomSampleRequest(
        LibraryIds=library_ids,
        SampleSize=size,
        IncludeMovies=movies,
        IncludeTvShows=tv,
        IncludeMusic=music,
    )


# ============== Tests ==============

class TestIncludeItemTypes:
    """Tests for the content-type flag mapping."""

    def test_movies_only(self):
        assert get_include_item_types(True, False, False) == ["Movie"]

    def test_tv_adds_series_and_episode(self):
        assert get_include_item_types(False, True, False) == ["Series", "Episode"]

    def test_music_adds_audio_and_album(self):
        assert get_include_item_types(False, False, True) == ["Audio", "MusicAlbum"]

    def test_all_flags(self):
        assert get_include_item_types(True, True, True) == [
            "Movie", "Series", "Episode", "Audio", "MusicAlbum"
        ]

    def test_all_flags_false_falls_back_to_movie_and_series(self):
        """Intentional but questionable: an empty choice is overridden, not rejected."""
        types = get_include_item_types(False, False, False)

        assert types == ["Movie", "Series"]
        assert types == FALLBACK_ITEM_TYPES

    def test_fallback_returns_a_copy(self):
        types = get_include_item_types(False, False, False)
        types.append("Audio")

        assert FALLBACK_ITEM_TYPES == ["Movie", "Series"]


class TestSamplerInit:
    """Tests for sampler construction."""

    def test_rejects_wrong_collaborators(self, dto_service, library_manager):
        with pytest.raises(TypeError):
            RandomItemSampler(object(), dto_service)
        with pytest.raises(TypeError):
            RandomItemSampler(library_manager, object())

    def test_rejects_non_positive_limit(self, library_manager, dto_service):
        with pytest.raises(ValueError):
            RandomItemSampler(library_manager, dto_service, per_library_limit=0)


class TestCandidateCollection:
    """Tests for gathering candidates across libraries."""

    def test_queries_each_library_recursively_without_virtual_items(self, sampler, library_manager, user):
        sampler.collect_candidates(["L1", "L2"], ["Movie"], user)

        assert [q.parent_id for q in library_manager.queries] == ["L1", "L2"]
        for query in library_manager.queries:
            assert query.recursive is True
            assert query.is_virtual_item is False
            assert query.limit == 1000
            assert query.include_item_types == ["Movie"]

    def test_unresolved_library_is_skipped(self, sampler, library_manager, user):
        candidates = sampler.collect_candidates(["missing", "L1"], ["Movie"], user)

        assert len(candidates) == 8
        assert [q.parent_id for q in library_manager.queries] == ["L1"]

    def test_hidden_library_is_skipped(self, sampler, library_manager, user):
        library_manager.hidden.add("L1")

        candidates = sampler.collect_candidates(["L1", "L2"], ["Movie", "Series"], user)

        assert {c["Id"] for c in candidates} == {f"series-{i}" for i in range(5)}

    def test_query_fault_aborts_collection(self, sampler, library_manager, user):
        library_manager.failing.add("L2")

        with pytest.raises(HostServiceError):
            sampler.collect_candidates(["L1", "L2"], ["Movie", "Series"], user)

    def test_per_library_limit_is_applied(self, library_manager, dto_service, user):
        library_manager.add_library("big", make_items("m", 30, "Movie"))
        sampler = RandomItemSampler(library_manager, dto_service, per_library_limit=10)

        candidates = sampler.collect_candidates(["big"], ["Movie"], user)

        assert len(candidates) == 10


class TestSampling:
    """Tests for the shuffle-then-truncate selection."""

    def test_returns_requested_size_when_pool_is_larger(self, sampler):
        pool = make_items("x", 20, "Movie")

        selected = sampler.sample(pool, 5)

        assert len(selected) == 5
        assert len({s["Id"] for s in selected}) == 5

    def test_returns_whole_pool_when_request_exceeds_it(self, sampler):
        pool = make_items("x", 4, "Movie")

        selected = sampler.sample(pool, 10)

        assert sorted(s["Id"] for s in selected) == sorted(p["Id"] for p in pool)

    def test_empty_pool(self, sampler):
        assert sampler.sample([], 10) == []

    def test_same_seed_gives_same_selection(self, library_manager, dto_service):
        pool = make_items("x", 50, "Movie")
        first = RandomItemSampler(library_manager, dto_service, random_seed=99).sample(pool, 10)
        second = RandomItemSampler(library_manager, dto_service, random_seed=99).sample(pool, 10)

        assert [i["Id"] for i in first] == [i["Id"] for i in second]

    def test_selection_frequency_is_uniform(self, library_manager, dto_service):
        pool = make_items("x", 10, "Movie")
        sampler = RandomItemSampler(library_manager, dto_service, random_seed=2024)
        trials = 5000
        sample_size = 3

        counts = Counter()
        for _ in range(trials):
            for item in sampler.sample(pool, sample_size):
                counts[item["Id"]] += 1

        expected = trials * sample_size / len(pool)
        assert set(counts) == {p["Id"] for p in pool}
        for item_id, count in counts.items():
            assert abs(count - expected) < expected * 0.1, item_id


class TestGetRandomSample:
    """End-to-end sampling through mocked host services."""

    def test_mixed_libraries_example(self, sampler, user):
        result = sampler.get_random_sample(make_request(["L1", "L2"], size=6), user)

        pool = {f"movie-{i}" for i in range(8)} | {f"series-{i}" for i in range(5)}
        ids = [item["Id"] for item in result.items]
        assert result.total_record_count == 6
        assert len(ids) == 6
        assert len(set(ids)) == 6
        assert set(ids) <= pool

    def test_count_is_min_of_size_and_candidates(self, sampler, user):
        for size in (1, 5, 13, 40):
            result = sampler.get_random_sample(make_request(["L1", "L2"], size=size), user)
            assert result.total_record_count == min(size, 13)

    def test_empty_library_returns_empty_result(self, sampler, user):
        result = sampler.get_random_sample(make_request(["L3"], size=10), user)

        assert result.items == []
        assert result.total_record_count == 0

    def test_null_sample_size_uses_default(self, library_manager, dto_service, user):
        library_manager.add_library("big", make_items("m", 50, "Movie"))
        sampler = RandomItemSampler(library_manager, dto_service)

        result = sampler.get_random_sample(make_request(["big"], size=None), user)

        assert result.total_record_count == 20

    def test_content_flags_filter_candidates(self, sampler, user):
        result = sampler.get_random_sample(make_request(["L1", "L2"], size=50, movies=False), user)

        assert {item["Type"] for item in result.items} == {"Series"}
        assert result.total_record_count == 5

    def test_duplicate_library_ids_are_queried_once(self, sampler, library_manager, user):
        result = sampler.get_random_sample(make_request(["L1", "L1"], size=50), user)

        assert result.total_record_count == 8
        assert [q.parent_id for q in library_manager.queries] == ["L1"]

    def test_converts_with_fixed_fields(self, sampler, dto_service, user):
        result = sampler.get_random_sample(make_request(["L1"], size=3), user)

        assert len(dto_service.converted) == 3
        for item in result.items:
            assert item["Fields"] == list(SAMPLE_DTO_OPTIONS.fields)
        assert "People" in SAMPLE_DTO_OPTIONS.fields
        assert "MediaStreams" in SAMPLE_DTO_OPTIONS.fields
