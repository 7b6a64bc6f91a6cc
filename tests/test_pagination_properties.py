"""Property-based tests for cursor-following comment retrieval."""

from hypothesis import given, settings
from hypothesis import strategies as st

from fakes import COMMENTS_URL, comment_payload, fake_session, make_response, next_link
from gist_rss.errors import PaginationError
from gist_rss.github import GistClient
from gist_rss.pagination import fetch_all_comments


def build_pages(pages):
    responses = []
    for index, ids in enumerate(pages):
        link = None
        if index < len(pages) - 1:
            link = next_link(f"{COMMENTS_URL}?page={index + 2}")
        responses.append(
            make_response([comment_payload(comment_id) for comment_id in ids], link=link)
        )
    return responses


class TestPaginationProperties:
    """Property-based tests for fetch_all_comments."""

    @settings(max_examples=50)
    @given(
        st.lists(
            st.lists(st.integers(min_value=1, max_value=10**9), max_size=5),
            min_size=1,
            max_size=8,
        )
    )
    def test_n_pages_n_requests_reversed_concatenation(self, pages):
        """
        For any chain of N pages, exactly N requests are made and the result
        is the reverse of the pages concatenated in fetch order.
        """
        session = fake_session(*build_pages(pages))

        comments = fetch_all_comments(GistClient(session=session), "abc123")

        concatenated = [comment_id for ids in pages for comment_id in ids]
        assert session.get.call_count == len(pages)
        assert [c.id for c in comments] == list(reversed(concatenated))

    @settings(max_examples=30)
    @given(st.integers(min_value=1, max_value=6), st.integers(min_value=1, max_value=6))
    def test_never_exceeds_page_ceiling(self, page_count, max_pages):
        """No more than max_pages requests are issued, whatever the chain length."""
        pages = [[number] for number in range(page_count)]
        session = fake_session(*build_pages(pages))

        try:
            fetch_all_comments(
                GistClient(session=session), "abc123", max_pages=max_pages
            )
            completed = True
        except PaginationError:
            completed = False

        assert session.get.call_count <= max_pages
        assert completed == (page_count <= max_pages)
