"""期限計算の結果型

evaluate() は Evaluation（成功）か MissingInput（必須項目の欠落）を返す。
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from core.policy import DeadlinePolicy


@dataclass(frozen=True, slots=True)
class DeadlineResult:
    """防火管理の受講期限。"""
    limit_date: date
    message: str                  # 根拠となる規定の説明文
    is_five_year: bool            # True: 次の4月1日から5年 / False: 選任から1年
    fusoku2_applied: bool = False


@dataclass(frozen=True, slots=True)
class DisasterResult:
    """防災管理の受講期限。"""
    limit_date: date
    message: str
    is_five_year: bool


@dataclass(frozen=True, slots=True)
class Evaluation:
    """evaluate() の成功結果。"""
    fire_training: date
    appointment: date
    disaster_training: date | None
    base_fire: DeadlineResult     # 附則2号判定前の防火期限
    fire: DeadlineResult
    disaster: DisasterResult | None
    limit_date: date              # 最終的な受講期限
    policy: DeadlinePolicy

    @property
    def check_disaster(self) -> bool:
        return self.disaster is not None

    @property
    def fusoku2_applied(self) -> bool:
        return self.fire.fusoku2_applied


@dataclass(frozen=True, slots=True)
class MissingInput:
    """必須の日付が空欄または不正。"""
    fields: tuple[str, ...]
    message: str
