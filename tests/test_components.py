"""Test the pipeline stages: senders, filters, matcher, ranker, paginator."""

import pytest
from datetime import timedelta

from message_search.core.exceptions import ValidationError
from message_search.core.filters import apply_filters, matches_criteria
from message_search.core.matcher import find_matches, match_messages
from message_search.core.paginator import paginate, page_window
from message_search.core.ranker import rank_results
from message_search.core.senders import compute_sender_directory
from message_search.models.message import MessageType, User
from message_search.models.query import DateRange, FilterCriteria, FilterType, SortOrder
from message_search.models.result import SearchResult
from message_search.utils.text_processing import TextProcessor


def ids(items):
    return [getattr(item, "message", item).id for item in items]


class TestSenderDirectory:
    """Test sender deduplication."""

    def test_first_seen_order(self, sample_messages):
        """Test senders appear once, ordered by first occurrence."""
        senders = compute_sender_directory(sample_messages)

        assert [s.id for s in senders] == ["u_alice", "u_bob", "u_carol"]

    def test_dedup_by_id_keeps_first(self, make_message):
        """Test the first User object wins when IDs repeat."""
        first = User(id="u1", name="Old Name")
        renamed = User(id="u1", name="New Name")
        messages = [make_message("m1", sender=first), make_message("m2", sender=renamed)]

        assert compute_sender_directory(messages) == [first]

    def test_empty_collection(self):
        """Test empty input yields an empty directory."""
        assert compute_sender_directory([]) == []


class TestFilterPipeline:
    """Test type, sender and date filtering."""

    @pytest.mark.parametrize("filter_type,expected", [
        (FilterType.ALL, ["m1", "m2", "m3", "m4", "m5", "m6", "m7", "m8"]),
        (FilterType.TEXT, ["m1", "m2", "m7"]),
        (FilterType.IMAGES, ["m3"]),
        (FilterType.FILES, ["m6"]),
        (FilterType.MEDIA, ["m3", "m4", "m5"]),
        (FilterType.LINKS, ["m7"]),
    ])
    def test_type_filters(self, sample_messages, filter_type, expected):
        """Test every type filter against the sample history."""
        filtered = apply_filters(sample_messages, FilterCriteria(filter_type=filter_type))

        assert ids(filtered) == expected

    def test_text_filter_requires_content(self, make_message):
        """Test empty text messages are excluded by the text filter."""
        messages = [make_message("m1", ""), make_message("m2", None), make_message("m3", "hi")]

        filtered = apply_filters(messages, FilterCriteria(filter_type=FilterType.TEXT))

        assert ids(filtered) == ["m3"]

    def test_links_filter_is_substring_heuristic(self, make_message):
        """Test any content containing 'http' counts as a link, regardless of type."""
        messages = [
            make_message("m1", "httpbin is handy", type=MessageType.SYSTEM),
            make_message("m2", "www.example.com"),
        ]

        filtered = apply_filters(messages, FilterCriteria(filter_type=FilterType.LINKS))

        assert ids(filtered) == ["m1"]

    def test_sender_filter(self, sample_messages):
        """Test sender filter."""
        filtered = apply_filters(sample_messages, FilterCriteria(sender_id="u_bob"))

        assert ids(filtered) == ["m2", "m5", "m7"]

    def test_date_range_filter(self, sample_messages, base_time):
        """Test inclusive date range filtering."""
        criteria = FilterCriteria(date_range=DateRange(
            start=base_time + timedelta(hours=2),
            end=base_time + timedelta(hours=4),
        ))

        assert ids(apply_filters(sample_messages, criteria)) == ["m3", "m4", "m5"]

    def test_open_ended_date_range(self, sample_messages, base_time):
        """Test absent bounds impose no constraint."""
        after = FilterCriteria(date_range=DateRange(start=base_time + timedelta(hours=6)))
        before = FilterCriteria(date_range=DateRange(end=base_time))

        assert ids(apply_filters(sample_messages, after)) == ["m7", "m8"]
        assert ids(apply_filters(sample_messages, before)) == ["m1"]

    def test_chat_and_attachment_filters(self, sample_messages):
        """Test chat and attachment constraints."""
        assert ids(apply_filters(sample_messages, FilterCriteria(chat_id="photos"))) == ["m3", "m4"]
        assert ids(apply_filters(sample_messages, FilterCriteria(has_attachments=True))) == ["m3", "m6"]
        assert "m3" not in ids(apply_filters(sample_messages, FilterCriteria(has_attachments=False)))

    def test_conjunction(self, sample_messages):
        """Test filters combine with AND semantics."""
        criteria = FilterCriteria(filter_type=FilterType.MEDIA, sender_id="u_bob")

        assert ids(apply_filters(sample_messages, criteria)) == ["m5"]
        assert not matches_criteria(sample_messages[2], criteria)

    def test_filtering_is_idempotent(self, sample_messages):
        """Test applying the same criteria twice equals applying it once."""
        for filter_type in FilterType:
            criteria = FilterCriteria(filter_type=filter_type, sender_id="u_alice")
            once = apply_filters(sample_messages, criteria)
            twice = apply_filters(once, criteria)
            assert twice == once

    def test_empty_result_is_valid(self, sample_messages):
        """Test filters that match nothing return an empty list."""
        assert apply_filters(sample_messages, FilterCriteria(sender_id="nobody")) == []

    def test_input_not_mutated(self, sample_messages):
        """Test filtering leaves the input collection untouched."""
        snapshot = list(sample_messages)
        apply_filters(sample_messages, FilterCriteria(filter_type=FilterType.MEDIA))

        assert sample_messages == snapshot


class TestTextMatcher:
    """Test substring matching and span extraction."""

    def test_overlapping_matches(self):
        """Test scanning resumes one past the previous match start."""
        spans = find_matches("aaa", "aa")

        assert [(s.start, s.end) for s in spans] == [(0, 2), (1, 3)]

    def test_case_insensitive_original_casing(self):
        """Test matches ignore case but report the original text."""
        spans = find_matches("Cat, CAT and cat", "cat")

        assert [s.text for s in spans] == ["Cat", "CAT", "cat"]
        assert [(s.start, s.end) for s in spans] == [(0, 3), (5, 8), (13, 16)]

    def test_span_correctness(self, sample_messages):
        """Test every span's folded text equals the folded query and lies in bounds."""
        for query in ["cat", "a", "AT", "e"]:
            for message in sample_messages:
                content = message.content or ""
                for span in find_matches(message.content, query):
                    assert 0 <= span.start < span.end <= len(content)
                    assert span.text.lower() == query.lower()
                    assert content[span.start:span.end] == span.text

    def test_absent_content_never_matches(self):
        """Test None or empty content produces no spans."""
        assert find_matches(None, "cat") == []
        assert find_matches("", "cat") == []

    def test_empty_query_passes_everything(self, sample_messages):
        """Test a blank query keeps every message with no spans."""
        results = match_messages(sample_messages, "   ")

        assert ids(results) == ids(sample_messages)
        assert all(result.matches == [] for result in results)

    def test_non_matching_messages_dropped(self, sample_messages):
        """Test messages without a match leave the result set."""
        results = match_messages(sample_messages, "cat")

        assert ids(results) == ["m1", "m7"]
        assert [r.match_count for r in results] == [1, 2]

    def test_query_is_trimmed(self, sample_messages):
        """Test surrounding whitespace in the query is ignored."""
        assert ids(match_messages(sample_messages, "  dog ")) == ["m2"]

    def test_length_changing_fold_keeps_offsets(self):
        """Test characters with multi-character lowercase forms keep offsets aligned."""
        content = "İstanbul cat"
        spans = find_matches(content, "cat")

        assert [(s.start, s.end, s.text) for s in spans] == [(9, 12, "cat")]

    def test_unicode_case_fold(self):
        """Test simple non-ASCII case folding."""
        spans = find_matches("ÉCOLE école", "école")

        assert [s.text for s in spans] == ["ÉCOLE", "école"]


class TestRanker:
    """Test result ordering."""

    @pytest.fixture
    def results(self, sample_messages):
        return match_messages(sample_messages, "")

    def test_newest(self, results):
        """Test newest ordering is non-increasing in time."""
        ranked = rank_results(results, SortOrder.NEWEST, query_active=False)
        stamps = [r.message.timestamp for r in ranked]

        assert all(a >= b for a, b in zip(stamps, stamps[1:]))
        assert ids(ranked)[0] == "m8"

    def test_oldest(self, results):
        """Test oldest ordering is non-decreasing in time."""
        ranked = rank_results(results, SortOrder.OLDEST, query_active=False)
        stamps = [r.message.timestamp for r in ranked]

        assert all(a <= b for a, b in zip(stamps, stamps[1:]))

    def test_relevance_without_query_is_newest(self, results):
        """Test relevance degenerates to newest when no query is active."""
        assert ids(rank_results(results, SortOrder.RELEVANCE, False)) == \
            ids(rank_results(results, SortOrder.NEWEST, False))

    def test_relevance_by_match_count_then_recency(self, make_message, base_time):
        """Test relevance ranks by match count, ties broken newest first."""
        messages = [
            make_message("old_one", "cat", timestamp=base_time),
            make_message("three", "cat cat cat", timestamp=base_time),
            make_message("new_one", "cat", timestamp=base_time + timedelta(hours=1)),
        ]
        results = match_messages(messages, "cat")

        ranked = rank_results(results, SortOrder.RELEVANCE, query_active=True)

        assert ids(ranked) == ["three", "new_one", "old_one"]

    def test_stable_for_equal_keys(self, make_message, base_time):
        """Test ties keep their input order under every policy."""
        messages = [make_message(f"m{i}", "cat", timestamp=base_time) for i in range(5)]
        results = match_messages(messages, "cat")

        for order in SortOrder:
            assert ids(rank_results(results, order, query_active=True)) == ["m0", "m1", "m2", "m3", "m4"]

    def test_input_not_mutated(self, results):
        """Test ranking returns a new list."""
        before = ids(results)
        rank_results(results, SortOrder.NEWEST, False)

        assert ids(results) == before


class TestPaginator:
    """Test pagination and clamping."""

    def test_clamps_past_last_page(self):
        """Test 25 items, page size 20, page 3 returns page 2."""
        page = paginate(list(range(25)), page_size=20, page=3)

        assert page.items == list(range(20, 25))
        assert page.current_page == 2
        assert page.total_pages == 2
        assert page.total_results == 25
        assert not page.has_next
        assert page.has_previous

    def test_empty_sequence(self):
        """Test an empty sequence gives page 1 of 0."""
        page = paginate([], page_size=10, page=4)

        assert page.items == []
        assert page.total_pages == 0
        assert page.current_page == 1
        assert not page.has_next
        assert not page.has_previous

    @pytest.mark.parametrize("page_size", [1, 2, 3, 7, 10, 25, 100])
    def test_pages_reconstruct_sequence(self, page_size):
        """Test concatenating every page reproduces the full sequence."""
        items = list(range(23))
        first = paginate(items, page_size, 1)

        rebuilt = []
        for number in range(1, first.total_pages + 1):
            rebuilt.extend(paginate(items, page_size, number).items)

        assert rebuilt == items

    def test_invalid_page_size(self):
        """Test page size below 1 is rejected."""
        with pytest.raises(ValidationError, match="Page size must be positive"):
            paginate([1, 2, 3], page_size=0)

    def test_page_window(self):
        """Test the navigation window of up to five pages."""
        assert page_window(1, 10) == [1, 2, 3, 4, 5]
        assert page_window(6, 10) == [4, 5, 6, 7, 8]
        assert page_window(10, 10) == [8, 9, 10]
        assert page_window(1, 3) == [1, 2, 3]
        assert page_window(1, 0) == []


class TestTextProcessor:
    """Test text helpers."""

    def test_fold_case_preserves_length(self):
        """Test folding never changes string length."""
        processor = TextProcessor()
        for text in ["Hello", "İİİ", "ẞtraße", "ΣΊΣΥΦΟΣ", ""]:
            assert len(processor.fold_case(text)) == len(text)

    def test_contains_link(self):
        """Test link heuristic."""
        processor = TextProcessor()

        assert processor.contains_link("go to http://x")
        assert not processor.contains_link(None)
        assert not processor.contains_link("no links here")
