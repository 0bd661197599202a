"""utils/wareki.py のユニットテスト"""

from dataclasses import FrozenInstanceError
from datetime import date

import pytest

from utils.wareki import (
    DEFAULT_ERAS,
    EraDefinition,
    JapaneseCalendarDate,
    NotFound,
    WarekiConverter,
    from_japanese_calendar,
    get_available_eras,
    to_japanese_calendar,
    to_wareki_full,
)


class TestToJapaneseCalendar:
    def test_reiwa_start(self):
        assert to_japanese_calendar(date(2019, 5, 1)) == JapaneseCalendarDate('令和', 1, 5, 1)

    def test_reiwa_5(self):
        assert to_japanese_calendar(date(2023, 11, 5)) == JapaneseCalendarDate('令和', 5, 11, 5)

    def test_heisei_last_day(self):
        assert to_japanese_calendar(date(2019, 4, 30)) == JapaneseCalendarDate('平成', 31, 4, 30)

    def test_heisei_start(self):
        assert to_japanese_calendar(date(1989, 1, 8)) == JapaneseCalendarDate('平成', 1, 1, 8)

    def test_showa_last_day(self):
        assert to_japanese_calendar(date(1989, 1, 7)) == JapaneseCalendarDate('昭和', 64, 1, 7)

    def test_showa_1(self):
        assert to_japanese_calendar(date(1926, 12, 25)).year_label() == '昭和元年'

    def test_taisho_start(self):
        assert to_japanese_calendar(date(1912, 7, 30)) == JapaneseCalendarDate('大正', 1, 7, 30)

    def test_meiji_last_day(self):
        assert to_japanese_calendar(date(1912, 7, 29)) == JapaneseCalendarDate('明治', 45, 7, 29)

    def test_new_year_2019_is_heisei(self):
        assert to_japanese_calendar(date(2019, 1, 1)).era == '平成'

    def test_before_oldest_era_falls_back_to_oldest(self):
        """明治より前は明治を過去方向に延長して換算する。"""
        result = to_japanese_calendar(date(1800, 1, 1))
        assert result.era == '明治'
        assert result.year == 1800 - 1868 + 1

    def test_result_is_frozen(self):
        jp = to_japanese_calendar(date(2023, 11, 5))
        with pytest.raises(FrozenInstanceError):
            jp.year = 6


class TestFromJapaneseCalendar:
    def test_reiwa_5(self):
        assert from_japanese_calendar('令和', 5, 11, 5) == date(2023, 11, 5)

    def test_reiwa_1(self):
        assert from_japanese_calendar('令和', 1, 5, 1) == date(2019, 5, 1)

    def test_heisei_31(self):
        assert from_japanese_calendar('平成', 31, 4, 30) == date(2019, 4, 30)

    # ── 期間外 / 実在しない日付 ──────────────────────────────────────────
    @pytest.mark.parametrize('era, year, month, day', [
        ('令和', 1, 1, 1),      # 令和開始前
        ('令和', 1, 4, 1),      # 令和開始前
        ('平成', 32, 1, 1),     # 平成終了後
        ('令和', 5, 13, 1),     # 13月
        ('令和', 5, 2, 30),     # 2月30日
        ('令和', 0, 5, 1),      # 0年
        ('令和', 5, 4, 31),     # 4月31日
        ('令和', 9000, 1, 1),   # 西暦の上限超え
        ('令和', 10**20, 1, 1), # C long に収まらない年
        ('令和', 5, 10**20, 1), # C long に収まらない月
    ])
    def test_invalid_date(self, era, year, month, day):
        result = from_japanese_calendar(era, year, month, day)
        assert isinstance(result, NotFound)
        assert result.reason == 'invalid_date'
        assert result.message

    def test_unknown_era(self):
        result = from_japanese_calendar('存在しない', 1, 1, 1)
        assert isinstance(result, NotFound)
        assert result.reason == 'unknown_era'
        assert '存在しない' in result.message

    def test_leap_day(self):
        assert from_japanese_calendar('令和', 6, 2, 29) == date(2024, 2, 29)

    def test_leap_day_in_common_year(self):
        assert isinstance(from_japanese_calendar('令和', 5, 2, 29), NotFound)


class TestRoundTrip:
    @pytest.mark.parametrize('d', [
        date(2023, 11, 5),
        date(2019, 5, 1),
        date(2019, 4, 30),
        date(1989, 1, 8),
        date(1989, 1, 7),
        date(1926, 12, 25),
        date(1926, 12, 24),
        date(1912, 7, 30),
        date(1912, 7, 29),
        date(2023, 1, 1),
        date(2023, 1, 31),
        date(2024, 2, 29),
    ])
    def test_round_trip(self, d):
        jp = to_japanese_calendar(d)
        assert from_japanese_calendar(jp.era, jp.year, jp.month, jp.day) == d


class TestGetAvailableEras:
    def test_newest_first(self):
        assert get_available_eras() == [
            ('令和', 'R'), ('平成', 'H'), ('昭和', 'S'), ('大正', 'T'), ('明治', 'M'),
        ]

    def test_contains_reiwa(self):
        assert ('令和', 'R') in get_available_eras()


class TestToWarekiFull:
    def test_full_format(self):
        assert to_wareki_full(date(2025, 4, 1)) == '令和7年4月1日'

    def test_first_year_is_gannen(self):
        assert to_wareki_full(date(2019, 5, 1)) == '令和元年5月1日'

    def test_heisei(self):
        assert to_wareki_full(date(2018, 6, 15)) == '平成30年6月15日'


class TestWarekiConverter:
    """元号テーブルを差し替えたコンバーター。"""

    _TABLE = (
        EraDefinition('平成', 'H', date(1989, 1, 8), date(2019, 4, 30)),
        EraDefinition('令和', 'R', date(2019, 5, 1)),
    )

    def test_table_sorted_newest_first(self):
        conv = WarekiConverter(self._TABLE)
        assert conv.get_available_eras() == [('令和', 'R'), ('平成', 'H')]

    def test_fallback_to_oldest_in_custom_table(self):
        conv = WarekiConverter(self._TABLE)
        result = conv.to_japanese_calendar(date(1980, 1, 1))
        assert result == JapaneseCalendarDate('平成', 1980 - 1989 + 1, 1, 1)

    def test_era_missing_from_custom_table(self):
        conv = WarekiConverter(self._TABLE)
        result = conv.from_japanese_calendar('昭和', 60, 1, 1)
        assert isinstance(result, NotFound)
        assert result.reason == 'unknown_era'

    def test_empty_table_raises(self):
        with pytest.raises(ValueError):
            WarekiConverter(())

    def test_default_table(self):
        assert WarekiConverter().eras == DEFAULT_ERAS

    def test_find_era(self):
        conv = WarekiConverter()
        assert conv.find_era('昭和').start == date(1926, 12, 25)
        assert conv.find_era('存在しない') is None


class TestEraDefinition:
    def test_open_ended(self):
        reiwa = EraDefinition('令和', 'R', date(2019, 5, 1))
        assert reiwa.contains(date(2100, 1, 1))
        assert not reiwa.contains(date(2019, 4, 30))

    def test_inclusive_bounds(self):
        heisei = EraDefinition('平成', 'H', date(1989, 1, 8), date(2019, 4, 30))
        assert heisei.contains(date(1989, 1, 8))
        assert heisei.contains(date(2019, 4, 30))
        assert not heisei.contains(date(2019, 5, 1))
