from moviecat.common.naming.slugger import movie_slug, slugify


def test_slugify_basic_and_accents():
    assert slugify("The Matrix") == "the-matrix"
    assert slugify("  Amélie!! ") == "amelie"
    assert slugify("Se7en: Director's Cut") == "se7en-director-s-cut"
    assert slugify("") == ""


def test_slugify_truncates_without_trailing_dash():
    out = slugify("a b c d e f", max_len=4)
    assert out == "a-b"


def test_movie_slug_joins_title_and_year():
    assert movie_slug("Inception", 2010) == "inception-2010"
    assert movie_slug("  The Dark Knight ", 2008) == "the-dark-knight-2008"


def test_movie_slug_is_deterministic():
    assert movie_slug("Amélie", 2001) == movie_slug("amelie", 2001)


def test_movie_slug_non_ascii_title_keeps_a_readable_base():
    slug = movie_slug("千と千尋の神隠し", 2001)
    assert slug.endswith("-2001")
    assert slug != "-2001"
