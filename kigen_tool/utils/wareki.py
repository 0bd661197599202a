"""西暦 ⇔ 和暦変換ユーティリティ

元号テーブルは変更不可の値（タプル）として WarekiConverter に渡す。
モジュール関数は DEFAULT_ERAS で作った既定のコンバーターに委譲する。

和暦→西暦で変換できない入力は例外ではなく NotFound を返す。
入力フォームからの値なので、呼び出し側でその場で修正を促せるようにする。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Literal

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EraDefinition:
    """元号 1 件。end=None は現在の元号（終了日なし）。"""
    name: str
    short: str
    start: date
    end: date | None = None

    def contains(self, d: date) -> bool:
        return self.start <= d and (self.end is None or d <= self.end)


@dataclass(frozen=True, slots=True)
class JapaneseCalendarDate:
    """和暦日付。WarekiConverter.to_japanese_calendar() からのみ生成する。"""
    era: str
    year: int
    month: int
    day: int

    def year_label(self) -> str:
        """'令和元年' / '令和7年' 形式。"""
        y = '元' if self.year == 1 else str(self.year)
        return f'{self.era}{y}年'

    def label(self) -> str:
        """'令和7年4月1日' 形式。"""
        return f'{self.year_label()}{self.month}月{self.day}日'


@dataclass(frozen=True, slots=True)
class NotFound:
    """和暦→西暦変換の失敗。"""
    reason: Literal['unknown_era', 'invalid_date']
    message: str


# 元号テーブル（新しい順）
DEFAULT_ERAS: tuple[EraDefinition, ...] = (
    EraDefinition('令和', 'R', date(2019, 5, 1)),
    EraDefinition('平成', 'H', date(1989, 1, 8), date(2019, 4, 30)),
    EraDefinition('昭和', 'S', date(1926, 12, 25), date(1989, 1, 7)),
    EraDefinition('大正', 'T', date(1912, 7, 30), date(1926, 12, 24)),
    EraDefinition('明治', 'M', date(1868, 1, 25), date(1912, 7, 29)),
)


class WarekiConverter:
    """元号テーブルを保持し、西暦 ⇔ 和暦を変換する。"""

    def __init__(self, eras: tuple[EraDefinition, ...] = DEFAULT_ERAS) -> None:
        if not eras:
            raise ValueError('元号テーブルが空です')
        # 走査は常に新しい順
        self._eras = tuple(sorted(eras, key=lambda e: e.start, reverse=True))

    @property
    def eras(self) -> tuple[EraDefinition, ...]:
        return self._eras

    def find_era(self, name: str) -> EraDefinition | None:
        for era in self._eras:
            if era.name == name:
                return era
        return None

    def to_japanese_calendar(self, d: date) -> JapaneseCalendarDate:
        """西暦日付を和暦に変換する。

        テーブルのどの元号にも含まれない日付（最古の元号より前）は、最古の
        元号を過去方向に無期限とみなして換算する。この場合の和暦年は 0 以下
        になりうる。
        """
        for era in self._eras:
            if era.contains(d):
                return JapaneseCalendarDate(era.name, d.year - era.start.year + 1, d.month, d.day)
        oldest = self._eras[-1]
        logger.debug('元号テーブル範囲外の日付 %s を %s として換算', d, oldest.name)
        return JapaneseCalendarDate(oldest.name, d.year - oldest.start.year + 1, d.month, d.day)

    def from_japanese_calendar(
        self, era_name: str, year: int, month: int, day: int,
    ) -> date | NotFound:
        """和暦を西暦日付に変換する。

        存在しない元号は NotFound('unknown_era')。実在しない日付（2月30日、
        13月など）や元号の期間外の日付は NotFound('invalid_date')。
        """
        era = self.find_era(era_name)
        if era is None:
            return NotFound('unknown_era', f'存在しない元号です: {era_name}')
        label = f'{era_name}{year}年{month}月{day}日'
        if year < 1:
            return NotFound('invalid_date', f'存在しない日付です: {label}')
        try:
            d = date(era.start.year + year - 1, month, day)
        except (ValueError, OverflowError):
            return NotFound('invalid_date', f'存在しない日付です: {label}')
        if not era.contains(d):
            return NotFound('invalid_date', f'{era_name}の期間外の日付です: {label}')
        return d

    def get_available_eras(self) -> list[tuple[str, str]]:
        """(元号名, 略号) のリストを新しい順に返す。"""
        return [(era.name, era.short) for era in self._eras]


_default = WarekiConverter()


def to_japanese_calendar(d: date) -> JapaneseCalendarDate:
    """
    西暦日付を和暦に変換する。

    Examples:
        >>> to_japanese_calendar(date(2019, 5, 1))
        JapaneseCalendarDate(era='令和', year=1, month=5, day=1)
        >>> to_japanese_calendar(date(1989, 1, 7))
        JapaneseCalendarDate(era='昭和', year=64, month=1, day=7)
    """
    return _default.to_japanese_calendar(d)


def from_japanese_calendar(era_name: str, year: int, month: int, day: int) -> date | NotFound:
    return _default.from_japanese_calendar(era_name, year, month, day)


def get_available_eras() -> list[tuple[str, str]]:
    return _default.get_available_eras()


def to_wareki_full(d: date) -> str:
    """
    和暦を「令和7年4月1日」形式で返す。

    Examples:
        >>> to_wareki_full(date(2025, 4, 1))
        '令和7年4月1日'
        >>> to_wareki_full(date(2019, 5, 1))
        '令和元年5月1日'
    """
    return to_japanese_calendar(d).label()
