# tests/database/test_movie_query_repo.py
from __future__ import annotations

from moviecat.database.repos.movie_query import MovieQueryRepo
from moviecat.domain.dataclasses.catalog import QuerySpecification
from moviecat.domain.enums import SortField, SortOrder


def _spec(**kw) -> QuerySpecification:
    kw.setdefault("page_size", 25)
    return QuerySpecification(**kw)


def _titles(rows):
    return [r.title for r in rows]


def test_get_by_id_and_slug(db, seeded):
    repo = MovieQueryRepo(db)
    inception = seeded["inception"]

    assert repo.get_by_id(inception.id).title == "Inception"
    assert repo.get_by_slug("inception-2010").id == inception.id
    assert repo.get_by_slug("inception-1999") is None


def test_title_filter_is_case_insensitive_substring(db, seeded):
    rows, total = MovieQueryRepo(db).search(_spec(title="IN", sort_field=SortField.title, sort_order=SortOrder.ascending))
    assert total == 2
    assert _titles(rows) == ["Inception", "Interstellar"]


def test_title_filter_treats_wildcards_literally(db, seeded):
    rows, total = MovieQueryRepo(db).search(_spec(title="%"))
    assert total == 0
    assert rows == []


def test_year_filter_exact_match(db, seeded):
    rows, total = MovieQueryRepo(db).search(_spec(year=2010))
    assert total == 1
    assert _titles(rows) == ["Inception"]


def test_sort_by_year_ascending_and_descending(db, seeded):
    repo = MovieQueryRepo(db)
    asc, _ = repo.search(_spec(sort_field=SortField.year, sort_order=SortOrder.ascending))
    desc, _ = repo.search(_spec(sort_field=SortField.year, sort_order=SortOrder.descending))

    assert [r.year_of_release for r in asc] == [2008, 2010, 2014, 2017, 2020]
    assert [r.year_of_release for r in desc] == [2020, 2017, 2014, 2010, 2008]


def test_total_count_is_independent_of_paging(db, seeded):
    repo = MovieQueryRepo(db)
    spec = dict(sort_field=SortField.year, sort_order=SortOrder.ascending, page_size=2)

    p1, t1 = repo.search(_spec(page=1, **spec))
    p2, t2 = repo.search(_spec(page=2, **spec))
    p3, t3 = repo.search(_spec(page=3, **spec))

    assert t1 == t2 == t3 == 5
    assert [r.year_of_release for r in p1] == [2008, 2010]
    assert [r.year_of_release for r in p2] == [2014, 2017]
    assert [r.year_of_release for r in p3] == [2020]


def test_page_past_the_end_is_empty_with_real_total(db, seeded):
    rows, total = MovieQueryRepo(db).search(_spec(page=4, page_size=2))
    assert rows == []
    assert total == 5


def test_ties_break_on_id_and_descending_is_exact_reverse(db, mk_movie):
    for i in range(6):
        mk_movie(f"Remake {i}", 1999)
    repo = MovieQueryRepo(db)

    asc, _ = repo.search(_spec(year=1999, sort_field=SortField.year, sort_order=SortOrder.ascending))
    desc, _ = repo.search(_spec(year=1999, sort_field=SortField.year, sort_order=SortOrder.descending))

    assert [r.id for r in asc] == sorted(r.id for r in asc)
    assert [r.id for r in desc] == [r.id for r in reversed(asc)]


def test_unsorted_paging_is_stable_and_covers_everything(db, mk_movie):
    for i in range(7):
        mk_movie(f"Short {i}", 2001)
    repo = MovieQueryRepo(db)

    seen = []
    for page in (1, 2, 3):
        first, _ = repo.search(_spec(year=2001, page=page, page_size=3))
        again, _ = repo.search(_spec(year=2001, page=page, page_size=3))
        assert [r.id for r in first] == [r.id for r in again]
        seen.extend(r.id for r in first)

    assert len(seen) == 7
    assert len(set(seen)) == 7


def test_genres_are_loaded_with_the_page(db, seeded):
    rows, _ = MovieQueryRepo(db).search(_spec(year=2014))
    assert rows[0].genre_names == ["Drama", "Sci-Fi"]
