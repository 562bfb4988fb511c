import pytest

from testsuites.ui_testing.pages.components.movie_card import MovieCardComponent
from testsuites.unit.fakes import FakeElement, FakePage


def make_card(**children):
    card = FakeElement(children=children)
    page = FakePage({"div.card": [card]})
    return card, MovieCardComponent(page.locator("div.card").first)


@pytest.mark.asyncio
async def test_reads_title_genre_and_poster():
    _, movie = make_card(**{
        "img": [FakeElement(attributes={"src": "https://image.tmdb.org/p.jpg"})],
        "p, h3, h4": [FakeElement(text="  Dune ")],
        "span, p": [FakeElement(text="Dune"), FakeElement(text=" Sci-Fi ")],
    })

    assert await movie.get_title() == "Dune"
    assert await movie.get_genre() == "Sci-Fi"
    assert await movie.get_image_src() == "https://image.tmdb.org/p.jpg"
    assert await movie.is_image_loaded() is True


@pytest.mark.asyncio
async def test_missing_parts_read_as_empty():
    _, movie = make_card()

    assert await movie.get_title() == ""
    assert await movie.get_genre() == ""
    assert await movie.get_image_src() == ""
    assert await movie.is_image_loaded() is False


@pytest.mark.asyncio
async def test_empty_src_is_not_loaded():
    _, movie = make_card(img=[FakeElement(attributes={"src": ""})])

    assert await movie.is_image_loaded() is False


@pytest.mark.asyncio
async def test_click_and_visibility():
    card, movie = make_card()

    await movie.click()

    assert card.clicks == 1
    assert await movie.is_visible() is True
