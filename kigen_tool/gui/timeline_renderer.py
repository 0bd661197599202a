"""タイムライン項目を PIL Image にレンダリングする。

GUI 下部のタイムライン表示用。日付計算は行わず、core/timeline.py が作った
TimelineItem の開始・終了日をそのまま横軸に配置する。
フォントは Meiryo → YuGothic → MSGothic → Noto Sans CJK の順で検索。
"""

from __future__ import annotations

import functools
import os
from collections.abc import Sequence
from datetime import date, timedelta

from PIL import Image, ImageDraw, ImageFont

from core.timeline import STYLE_DEADLINE, STYLE_INPUT, TIMELINE_GROUPS, TimelineItem

# ── 定数 ──────────────────────────────────────────────────────────────────────

_MARGIN = 10             # 画像外周マージン (px)
_LABEL_W = 56            # 左端のグループ名列の幅 (px)
_AXIS_H = 26             # 年目盛りの高さ (px)
_POINT_LANE_H = 44       # 時点グループ 1 レーンの高さ (px)
_RANGE_ROW_H = 24        # 期間 1 件あたりの高さ (px)
_PAD_DAYS = 60           # 表示範囲の前後の余白（日）
_MIN_WIDTH = 300

_BG_COLOR = (255, 255, 255)
_GRID_COLOR = (220, 220, 220)
_AXIS_COLOR = (120, 120, 120)
_TEXT_COLOR = (30, 30, 30)
_LANE_SEP_COLOR = (200, 200, 200)

_STYLE_COLORS: dict[str, tuple[int, int, int]] = {
    STYLE_INPUT: (255, 192, 203),     # pink
    STYLE_DEADLINE: (230, 40, 40),    # red
}
_DEFAULT_ITEM_COLOR = (213, 221, 246)
_ITEM_BORDER_COLOR = (151, 176, 248)

_FONT_PATHS = [
    'C:/Windows/Fonts/meiryo.ttc',
    'C:/Windows/Fonts/YuGothR.ttc',
    'C:/Windows/Fonts/msgothic.ttc',
    '/usr/share/fonts/opentype/noto/NotoSansCJK-Regular.ttc',
    '/usr/share/fonts/noto-cjk/NotoSansCJK-Regular.ttc',
]


# ── フォントキャッシュ ─────────────────────────────────────────────────────────

@functools.lru_cache(maxsize=16)
def _load_font(size_px: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """システムフォントを読み込む。見つからなければ PIL 既定フォント。"""
    for path in _FONT_PATHS:
        if os.path.exists(path):
            try:
                return ImageFont.truetype(path, size=size_px, index=0)
            except (OSError, IndexError):
                continue
    return ImageFont.load_default()


# ── ヘルパー ──────────────────────────────────────────────────────────────────

def _style_color(style: str) -> tuple[int, int, int]:
    """スタイルヒント → 塗り色。未知のヒントは既定色。"""
    return _STYLE_COLORS.get(style, _DEFAULT_ITEM_COLOR)


def _date_range(items: Sequence[TimelineItem]) -> tuple[date, date]:
    """全項目を含む表示範囲（前後に余白を付ける）。"""
    days = [date.fromisoformat(it.start) for it in items]
    days += [date.fromisoformat(it.end) for it in items if it.end]
    return min(days) - timedelta(days=_PAD_DAYS), max(days) + timedelta(days=_PAD_DAYS)


def _date_to_x(d: date, start: date, end: date, x0: float, x1: float) -> float:
    """日付を横軸のピクセル位置に変換する。"""
    span = (end - start).days or 1
    return x0 + (x1 - x0) * (d - start).days / span


def _text_width(draw: ImageDraw.ImageDraw, text: str, font) -> int:
    bbox = draw.textbbox((0, 0), text, font=font)
    return int(bbox[2] - bbox[0])


def _draw_axis(draw, start: date, end: date, x0: float, x1: float, y: int, bottom: int, font) -> None:
    """1月1日ごとの年目盛りと縦グリッド。"""
    draw.line([(x0, y + _AXIS_H - 1), (x1, y + _AXIS_H - 1)], fill=_AXIS_COLOR)
    for year in range(start.year + 1, end.year + 1):
        x = _date_to_x(date(year, 1, 1), start, end, x0, x1)
        draw.line([(x, y + _AXIS_H - 6), (x, bottom)], fill=_GRID_COLOR)
        draw.text((x + 2, y + 4), str(year), fill=_TEXT_COLOR, font=font)


def _draw_point(draw, item: TimelineItem, x: float, y: int, font) -> None:
    """時点項目: 縦線 + ラベル枠。"""
    label = item.content
    w = _text_width(draw, label, font) + 8
    draw.line([(x, y), (x, y + _POINT_LANE_H // 2)], fill=_AXIS_COLOR)
    draw.rectangle(
        [x, y, x + w, y + 18], fill=_style_color(item.style), outline=_ITEM_BORDER_COLOR,
    )
    draw.text((x + 4, y + 2), label, fill=_TEXT_COLOR, font=font)


def _draw_range(draw, item: TimelineItem, xa: float, xb: float, y: int, font) -> None:
    """期間項目: 横長の帯 + ラベル。"""
    draw.rectangle(
        [xa, y + 2, max(xb, xa + 2), y + _RANGE_ROW_H - 4],
        fill=_style_color(item.style), outline=_ITEM_BORDER_COLOR,
    )
    draw.text((xa + 4, y + 4), item.content, fill=_TEXT_COLOR, font=font)


# ── メイン関数 ─────────────────────────────────────────────────────────────────

def render_timeline(
    items: Sequence[TimelineItem],
    width: int = 900,
    font_size: int = 12,
) -> Image.Image:
    """TimelineItem のリストを 1 枚の RGB 画像に描画する。

    グループ（日付・日付・期間）ごとに横レーンを分け、期間は 1 件 1 行で
    積み上げる。項目が空なら余白だけの画像を返す。
    """
    width = max(width, _MIN_WIDTH)
    font = _load_font(font_size)

    groups = [gid for gid, _ in TIMELINE_GROUPS]
    labels = dict(TIMELINE_GROUPS)
    ranges = [it for it in items if it.is_range]
    points = {gid: [it for it in items if not it.is_range and it.group == gid] for gid in groups}

    lane_heights = {
        gid: (len(ranges) * _RANGE_ROW_H if gid == 'term' else _POINT_LANE_H)
        for gid in groups
    }
    height = _MARGIN * 2 + _AXIS_H + sum(max(h, _RANGE_ROW_H) for h in lane_heights.values())

    img = Image.new('RGB', (width, height), _BG_COLOR)
    if not items:
        return img
    draw = ImageDraw.Draw(img)

    start, end = _date_range(items)
    x0 = _MARGIN + _LABEL_W
    x1 = width - _MARGIN
    _draw_axis(draw, start, end, x0, x1, _MARGIN, height - _MARGIN, font)

    y = _MARGIN + _AXIS_H
    for gid in groups:
        lane_h = max(lane_heights[gid], _RANGE_ROW_H)
        draw.text((_MARGIN, y + 4), labels[gid], fill=_TEXT_COLOR, font=font)
        if gid == 'term':
            for i, item in enumerate(ranges):
                xa = _date_to_x(date.fromisoformat(item.start), start, end, x0, x1)
                xb = _date_to_x(date.fromisoformat(item.end), start, end, x0, x1)
                _draw_range(draw, item, xa, xb, y + i * _RANGE_ROW_H, font)
        else:
            # ラベルの重なりを減らすため上下 2 段に交互配置
            ordered = sorted(points[gid], key=lambda it: it.start)
            for i, item in enumerate(ordered):
                x = _date_to_x(date.fromisoformat(item.start), start, end, x0, x1)
                _draw_point(draw, item, x, y + 2 + (i % 2) * 20, font)
        y += lane_h
        draw.line([(_MARGIN, y), (x1, y)], fill=_LANE_SEP_COLOR)

    return img
