"""タイムライン表示用レコードの組み立て

描画側（gui/timeline_renderer.py やエクスポート）は日付計算を行わず、
ここで作った TimelineItem をそのまま使う。
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date

from core.deadline import (
    YEARS_BEFORE_SENNIN,
    disaster_five_year_window,
    five_year_limit,
    one_year_limit,
)
from core.models import Evaluation
from utils.date_calc import add_years, next_fiscal_year_start
from utils.date_fmt import format_date

# (グループID, 表示名)
TIMELINE_GROUPS: tuple[tuple[str, str], ...] = (
    ('date1', '日付'),
    ('date2', '日付'),
    ('term', '期間'),
)

# スタイルヒント
STYLE_INPUT = 'input'
STYLE_DEADLINE = 'deadline'

DEADLINE_ITEM_ID = 99

# 防災の5年ルールの期間ラベル（policy.disaster_rule 別）
DISASTER_RANGE_LABELS: dict[str, str] = {
    'fiscal_anchored': '防災受講日の次の4/1から5年間',
    'direct': '防災受講日から5年間',
}


@dataclass(frozen=True, slots=True)
class TimelineItem:
    id: int
    group: str
    content: str
    start: str
    end: str | None = None   # None なら時点、あれば期間
    title: str = ''
    style: str = ''

    @property
    def is_range(self) -> bool:
        return self.end is not None

    def to_dict(self) -> dict:
        return asdict(self)


def _iso(d: date) -> str:
    return format_date(d, 'yyyy-MM-dd')


def _point(item_id: int, group: str, content: str, d: date, style: str = '') -> TimelineItem:
    title = _iso(d) if style else ''
    return TimelineItem(item_id, group, content, _iso(d), title=title, style=style)


def _range(item_id: int, content: str, start: date, end: date) -> TimelineItem:
    return TimelineItem(item_id, 'term', content, _iso(start), _iso(end))


def build_timeline(evaluation: Evaluation) -> list[TimelineItem]:
    """判定結果からタイムライン項目を作る。"""
    fire_training = evaluation.fire_training
    appointment = evaluation.appointment
    fire_next_april = next_fiscal_year_start(fire_training)

    items = [
        _point(1, 'date1', '防火受講日', fire_training, STYLE_INPUT),
        _point(2, 'date1', '選任日', appointment, STYLE_INPUT),
        _point(3, 'date2', '防火受講日の次の4/1', fire_next_april),
        _range(4, '選任日から過去４年間',
               add_years(appointment, YEARS_BEFORE_SENNIN), appointment),
        _range(5, '防火受講日の次の4/1から5年間',
               fire_next_april, five_year_limit(fire_training)),
        _range(6, '選任日から1年間', appointment, one_year_limit(appointment)),
    ]

    disaster_training = evaluation.disaster_training
    if evaluation.check_disaster and disaster_training is not None:
        rule = evaluation.policy.disaster_rule
        window_start, window_end = disaster_five_year_window(disaster_training, evaluation.policy)
        items += [
            _point(7, 'date1', '防災受講日', disaster_training, STYLE_INPUT),
            _point(8, 'date2', '防災受講日の次の4/1', next_fiscal_year_start(disaster_training)),
            _range(9, DISASTER_RANGE_LABELS[rule], window_start, window_end),
        ]

    items.append(
        _point(DEADLINE_ITEM_ID, 'date1', '受講期日', evaluation.limit_date, STYLE_DEADLINE)
    )
    return items
