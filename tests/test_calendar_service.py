"""
띠/별자리/시진 계산 테스트
"""

import pytest

from app.services.calendar_service import (
    TIME_NOT_PROVIDED,
    ZODIAC_ANIMALS,
    animal_sign,
    derive_features,
    star_sign,
    time_branch,
)


class TestAnimalSign:

    def test_1990_is_horse(self):
        assert animal_sign(1990) == "horse"

    def test_reference_year_is_rat(self):
        assert animal_sign(1984) == "rat"
        assert animal_sign(4) == "rat"

    @pytest.mark.parametrize("year", [-100, 0, 3, 1900, 1971, 2000, 2026, 3001])
    def test_twelve_year_cycle(self, year):
        assert animal_sign(year) == animal_sign(year + 12)

    def test_covers_all_labels(self):
        assert {animal_sign(y) for y in range(2000, 2012)} == set(ZODIAC_ANIMALS)


class TestStarSign:

    def test_aries_start(self):
        assert star_sign(3, 21) == "Aries"
        assert star_sign(3, 20) == "Pisces"

    def test_wrap_range_boundaries(self):
        assert star_sign(1, 19) == "Capricorn"
        assert star_sign(1, 20) == "Aquarius"
        assert star_sign(12, 22) == "Capricorn"
        assert star_sign(12, 31) == "Capricorn"
        assert star_sign(1, 1) == "Capricorn"
        assert star_sign(12, 21) == "Sagittarius"

    def test_leap_day(self):
        assert star_sign(2, 29) == "Pisces"

    def test_out_of_calendar_values_land_in_wrap_range(self):
        # 13월 같은 값도 거르지 않는다
        assert star_sign(13, 5) == "Capricorn"
        assert star_sign(0, 0) == "Capricorn"


class TestTimeBranch:

    def test_midnight_hours_use_first_slot(self):
        assert time_branch(23, 0) == "자시"
        assert time_branch(0, 0) == "자시"
        assert time_branch(23, 59) == time_branch(0, 30) == "자시"

    def test_regular_slots(self):
        assert time_branch(1, 0) == "축시"
        assert time_branch(2, 59) == "축시"
        assert time_branch(11, 0) == "오시"
        assert time_branch(22, 10) == "해시"

    def test_minute_is_ignored(self):
        assert time_branch(14, 0) == time_branch(14, 59) == "미시"


class TestDeriveFeatures:

    def test_with_birthtime(self):
        features = derive_features("19900321", "07:30")
        assert features == {
            "zodiac_animal": "horse",
            "star_sign": "Aries",
            "time_branch": "진시",
        }

    def test_without_birthtime(self):
        features = derive_features("19900321")
        assert features["time_branch"] == TIME_NOT_PROVIDED

    def test_invalid_month_is_not_rejected(self):
        features = derive_features("19901399")
        assert features["zodiac_animal"] == "horse"
