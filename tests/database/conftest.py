# tests/database/conftest.py
from __future__ import annotations

from typing import Dict

import pytest

from moviecat.database.models import Movie


@pytest.fixture()
def seeded(mk_movie) -> Dict[str, Movie]:
    """
    Five movies with distinct years:
      2008 The Dark Knight, 2010 Inception, 2014 Interstellar, 2017 Dunkirk, 2020 Tenet
    """
    return {
        "dark_knight": mk_movie("The Dark Knight", 2008, ["Action", "Crime"]),
        "inception": mk_movie("Inception", 2010, ["Sci-Fi", "Thriller"]),
        "interstellar": mk_movie("Interstellar", 2014, ["Sci-Fi", "Drama"]),
        "dunkirk": mk_movie("Dunkirk", 2017, ["War"]),
        "tenet": mk_movie("Tenet", 2020, ["Action", "Sci-Fi"]),
    }
