from datetime import date

import pytest

from testsuites.ui_testing.pages.components.filter_component import FilterComponent, YearRange
from testsuites.unit.fakes import FakeElement, FakePage


def make_filters(elements, run_config):
    fake = FakePage(elements)
    return fake, FilterComponent(fake, run_config=run_config)


@pytest.mark.asyncio
async def test_select_movies_waits_for_grid(run_config):
    movie = FakeElement(text="Movie")
    fake, filters = make_filters({"text=Movie": [movie]}, run_config)

    await filters.select_movies()

    assert movie.clicks == 1
    assert fake.load_states == ["networkidle"]
    assert fake.timeouts == [run_config.filter_settle]


@pytest.mark.asyncio
async def test_type_selection_state(run_config):
    _, filters = make_filters({
        "text=Movie": [FakeElement(attributes={"class": "btn selected"})],
        "text=TV": [FakeElement(attributes={"class": "btn"})],
    }, run_config)

    assert await filters.is_movie_selected() is True
    assert await filters.is_tv_selected() is False


@pytest.mark.asyncio
async def test_available_genres_are_trimmed(run_config):
    select = FakeElement(tag="SELECT", children={
        "option": [FakeElement(text=" Action "), FakeElement(text="Comedy\n")],
    })
    _, filters = make_filters({"select": [select]}, run_config)

    assert await filters.get_available_genres() == ["Action", "Comedy"]


@pytest.mark.asyncio
async def test_genre_reads_degrade_to_defaults(run_config):
    _, filters = make_filters({}, run_config)

    assert await filters.get_available_genres() == []
    assert await filters.get_selected_genre() == ""


@pytest.mark.asyncio
async def test_select_genre_reads_back(run_config):
    _, filters = make_filters({"select": [FakeElement(tag="SELECT")]}, run_config)

    await filters.select_genre("Drama")

    assert await filters.get_selected_genre() == "Drama"


@pytest.mark.asyncio
async def test_year_range_round_trip(run_config):
    inputs = [FakeElement(tag="INPUT"), FakeElement(tag="INPUT")]
    _, filters = make_filters({"input[type='number']": inputs}, run_config)

    await filters.set_year_range(1999, 2005)

    assert await filters.get_year_range() == YearRange(min=1999, max=2005)


@pytest.mark.asyncio
async def test_min_and_max_year_set_separately(run_config):
    inputs = [FakeElement(tag="INPUT"), FakeElement(tag="INPUT")]
    _, filters = make_filters({"input[type='number']": inputs}, run_config)

    await filters.set_min_year(1980)
    await filters.set_max_year(1990)

    assert [i.value for i in inputs] == ["1980", "1990"]


@pytest.mark.asyncio
async def test_year_range_defaults(run_config):
    inputs = [FakeElement(tag="INPUT", value=""), FakeElement(tag="INPUT", value="abc")]
    _, filters = make_filters({"input[type='number']": inputs}, run_config)

    assert await filters.get_year_range() == YearRange(min=1900, max=date.today().year)


@pytest.mark.asyncio
async def test_year_range_reads_leading_digits(run_config):
    inputs = [FakeElement(tag="INPUT", value=" 2000abc"), FakeElement(tag="INPUT", value="2015.5")]
    _, filters = make_filters({"input[type='number']": inputs}, run_config)

    assert await filters.get_year_range() == YearRange(min=2000, max=2015)


@pytest.mark.asyncio
async def test_year_range_without_inputs(run_config):
    _, filters = make_filters({}, run_config)

    assert await filters.get_year_range() == YearRange(min=1900, max=date.today().year)


@pytest.mark.asyncio
async def test_selected_rating(run_config):
    stars = [FakeElement(attributes={"aria-checked": "false"}) for _ in range(5)]
    stars[2].attributes["aria-checked"] = "true"
    _, filters = make_filters({"[role='radio']": stars}, run_config)

    assert await filters.get_selected_rating() == 3


@pytest.mark.asyncio
async def test_selected_rating_is_zero_without_controls(run_config):
    _, filters = make_filters({}, run_config)

    assert await filters.get_selected_rating() == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("stars", [0, 6])
async def test_set_rating_out_of_range_is_noop(run_config, stars):
    controls = [FakeElement() for _ in range(5)]
    fake, filters = make_filters({"[role='radio']": controls}, run_config)

    await filters.set_rating(stars)

    assert all(c.clicks == 0 for c in controls)
    assert fake.load_states == []
