"""Basic usage example for the message search engine."""

import json

from message_search import MessageSearchService, FilterType, SortOrder


SAMPLE_RECORDS = [
    {
        "id": "msg_001",
        "content": "Has anyone seen the cat video Dana posted?",
        "type": "text",
        "sender": {"id": "u_alex", "name": "Alex"},
        "timestamp": "2024-03-01T09:15:00+00:00",
        "chat_id": "random",
        "chat_name": "#random",
    },
    {
        "id": "msg_002",
        "content": None,
        "type": "video",
        "sender": {"id": "u_dana", "name": "Dana"},
        "timestamp": "2024-03-01T09:20:00+00:00",
        "chat_id": "random",
        "chat_name": "#random",
        "attachments": [
            {"id": "att_1", "name": "cat.mp4", "type": "video/mp4", "url": "https://cdn.example/cat.mp4"}
        ],
    },
    {
        "id": "msg_003",
        "content": "Release notes: https://example.com/releases/2.4",
        "type": "text",
        "sender": {"id": "u_sam", "name": "Sam"},
        "timestamp": "2024-03-01T10:02:00+00:00",
        "chat_id": "eng",
        "chat_name": "#eng",
    },
    {
        "id": "msg_004",
        "content": "The cat cat-walk demo is at noon, cat lovers welcome",
        "type": "text",
        "sender": {"id": "u_dana", "name": "Dana"},
        "timestamp": "2024-03-01T11:30:00+00:00",
        "chat_id": "random",
        "chat_name": "#random",
    },
]


def basic_search_demo():
    """Demonstrate basic search functionality."""
    print("Message Search - Basic Usage Demo")
    print("=" * 50)

    with MessageSearchService.create(records=SAMPLE_RECORDS, log_level="INFO") as service:
        print(f"\nSenders: {', '.join(user.name for user in service.senders())}")

        print("\n1. Relevance-ranked search for 'cat'")
        response = service.search_text("cat")
        for result in response.results:
            spans = ", ".join(f"[{m.start},{m.end})" for m in result.matches)
            print(f"   {result.message.id} ({result.match_count} matches: {spans}) {result.snippet(60)}")

        print("\n2. Links only, oldest first")
        response = service.search_text("", filter_type=FilterType.LINKS, sort_order=SortOrder.OLDEST)
        for result in response.results:
            print(f"   {result.message.id}: {result.message.content}")

        print("\n3. Paging through a session two results at a time")
        session = service.open_session(page_size=2)
        while True:
            page = session.response
            print(f"   page {page.current_page}/{page.total_pages}: "
                  f"{[r.message.id for r in page.results]}")
            if not page.has_next:
                break
            session.next_page()

        print(f"\nStats: {json.dumps(service.get_stats(), indent=2)}")


if __name__ == "__main__":
    basic_search_demo()
