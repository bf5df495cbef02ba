import uuid

from moviecat.domain.dataclasses.catalog import MoviePage, MovieView, QuerySpecification
from moviecat.domain.enums import SortField, SortOrder


def _view(title="Inception", user_rating=None) -> MovieView:
    return MovieView(
        id=uuid.uuid4(), title=title, year_of_release=2010, slug="inception-2010",
        genres=("Sci-Fi",), rating=3.0, user_rating=user_rating,
    )


def test_cache_key_ignores_user_and_title_case():
    a = QuerySpecification(title="Inception", sort_field=SortField.year, sort_order=SortOrder.ascending,
                           user_id=uuid.uuid4())
    b = QuerySpecification(title="inception", sort_field=SortField.year, sort_order=SortOrder.ascending)
    assert a.cache_key() == b.cache_key()


def test_cache_key_differs_by_page_and_sort():
    base = QuerySpecification()
    assert base.cache_key() != QuerySpecification(page=2).cache_key()
    assert base.cache_key() != QuerySpecification(sort_field=SortField.title, sort_order=SortOrder.ascending).cache_key()
    assert QuerySpecification(page=3, page_size=10).offset == 20


def test_shared_strips_caller_ratings():
    page = MoviePage(items=(_view(user_rating=4), _view("Tenet")), total_count=2)
    shared = page.shared()
    assert [it.user_rating for it in shared.items] == [None, None]
    assert [it.rating for it in shared.items] == [3.0, 3.0]
    assert page.items[0].user_rating == 4


def test_overlay_applies_only_known_ids():
    a, b = _view(), _view("Tenet")
    page = MoviePage(items=(a, b), total_count=2).overlay({a.id: 5})
    assert [it.user_rating for it in page.items] == [5, None]
    assert page.total_count == 2
