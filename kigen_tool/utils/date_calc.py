"""再講習期限計算用の日付演算ユーティリティ

どの関数も引数の date を変更せず、新しい date を返す。
"""

from __future__ import annotations

import calendar
from datetime import date, timedelta

# 年度の開始月（4月1日起算）
FISCAL_YEAR_START_MONTH = 4


def next_fiscal_year_start(d: date) -> date:
    """d から見て次の 4月1日 を返す。

    1〜3月 → 同年の4月1日、4月1日以降 → 翌年の4月1日。
    日を先に 1 日へ固定してから月を動かすので、月末日でも繰り上がらない。

    Examples:
        >>> next_fiscal_year_start(date(2023, 1, 31))
        datetime.date(2023, 4, 1)
        >>> next_fiscal_year_start(date(2023, 4, 1))
        datetime.date(2024, 4, 1)
    """
    first = d.replace(day=1)
    year = first.year + 1 if first.month >= FISCAL_YEAR_START_MONTH else first.year
    return first.replace(year=year, month=FISCAL_YEAR_START_MONTH)


def add_years(d: date, years: int) -> date:
    """years 年後（負なら前）の日付を返す。

    2月29日が平年に当たった場合は 3月1日 に繰り越す（暦のあふれをそのまま
    採用し、2月28日への切り詰めはしない）。選任日の4年前判定はこの挙動を前提
    にしている。
    結果の年が date の範囲外なら ValueError。
    """
    year = d.year + years
    if (d.month, d.day) == (2, 29) and not calendar.isleap(year):
        return date(year, 3, 1)
    return d.replace(year=year)


def previous_day(d: date) -> date:
    """前日を返す。"""
    return d - timedelta(days=1)


def next_day(d: date) -> date:
    """翌日を返す。"""
    return d + timedelta(days=1)
