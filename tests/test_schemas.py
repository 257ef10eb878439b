"""
Homebase Backend: Schema and Parsing Tests
==========================================

What we test:
    ✅ Half-up rounding of money fields, None and 0 preserved
    ✅ camelCase in, camelCase out
    ✅ Path id parsing
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from homebase.exceptions import ValidationError
from homebase.routes import parse_resource_id
from homebase.schemas.common import round_half_up
from homebase.schemas.movie import MovieInput, MovieResponse
from homebase.schemas.property import PropertyCreate, PropertyUpdate


class TestRoundHalfUp:

    @pytest.mark.parametrize(
        "value, expected",
        [(2.5, 3), (2.4, 2), (-2.5, -2), (-2.6, -3), (0.5, 1), (1234.5, 1235)],
    )
    def test_floats(self, value, expected):
        assert round_half_up(value) == expected

    def test_non_floats_pass_through(self):
        assert round_half_up(7) == 7
        assert round_half_up(None) is None
        assert round_half_up("12") == "12"

    @pytest.mark.parametrize("value", [True, False])
    def test_booleans_rejected(self, value):
        with pytest.raises(ValueError):
            round_half_up(value)


class TestPropertyBodies:

    def test_camel_case_input_rounds(self):
        body = PropertyCreate.model_validate(
            {"formattedAddress": "1 Main St", "priceRangeLow": 10.5, "squareFootage": 999.4}
        )
        assert body.formatted_address == "1 Main St"
        assert body.price_range_low == 11
        assert body.square_footage == 999

    def test_absent_is_none_and_zero_is_zero(self):
        body = PropertyCreate.model_validate({"formattedAddress": "1 Main St", "price": 0})
        assert body.price == 0
        assert body.last_sale_price is None

    def test_numeric_string_accepted(self):
        assert PropertyUpdate.model_validate({"monthlyRent": "1500"}).monthly_rent == 1500

    def test_garbage_rejected(self):
        with pytest.raises(PydanticValidationError):
            PropertyUpdate.model_validate({"hoaPayment": "about fifty"})

    def test_out_of_range_money_rejected(self):
        with pytest.raises(PydanticValidationError):
            PropertyCreate.model_validate({"formattedAddress": "1 Main St", "price": 1e30})

    def test_largest_column_value_accepted(self):
        body = PropertyCreate.model_validate({"formattedAddress": "1 Main St", "lastSalePrice": 2147483647})
        assert body.last_sale_price == 2147483647

    @pytest.mark.parametrize("field", ["price", "bedrooms", "bathrooms"])
    def test_booleans_are_not_numbers(self, field):
        with pytest.raises(PydanticValidationError):
            PropertyCreate.model_validate({"formattedAddress": "1 Main St", field: True})

    def test_boolean_interest_rate_rejected(self):
        with pytest.raises(PydanticValidationError):
            PropertyUpdate.model_validate({"interestRate": False})

    def test_interest_rate_is_not_rounded(self):
        assert PropertyUpdate.model_validate({"interestRate": 6.875}).interest_rate == 6.875


class TestMovieInput:

    def test_boolean_rating_rejected(self):
        with pytest.raises(PydanticValidationError):
            MovieInput.model_validate({"title": "X", "imdbLink": "http://y", "rating": True})

    def test_integer_rating_accepted(self):
        assert MovieInput.model_validate({"rating": 4}).rating == 4


class TestMovieResponse:

    def test_serializes_camel_case(self):
        movie = MovieResponse(movie_id=1, user_id=2, title="X", imdb_link="http://y", rating=3)
        dumped = movie.model_dump(by_alias=True)
        assert set(dumped) == {"movieId", "userId", "title", "summary", "imdbLink", "rating"}


class TestParseResourceId:

    def test_positive_integer(self):
        assert parse_resource_id("42", "property") == 42

    def test_largest_integer_key(self):
        assert parse_resource_id("2147483647", "movie") == 2147483647

    @pytest.mark.parametrize(
        "raw",
        ["", "abc", "0", "-1", "+5", "2.0", "1e3", "1_000", "\u0663", "2147483648", "99999999999999999999"],
    )
    def test_rejected(self, raw):
        with pytest.raises(ValidationError) as excinfo:
            parse_resource_id(raw, "movie")
        assert excinfo.value.message == "movie id must be a positive integer"
