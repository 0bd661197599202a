"""期限計算ポリシー

防災管理講習の5年期限の起算方法と、附則2号の適用に防火の5年ルールを
要件とするかどうかは運用の変遷で二通りある。評価ロジックの分岐はそのままに、
ポリシーを差し替えて切り替える。

  - strict: 防災も「次の4月1日」起算、附則2号は防火が5年ルールの場合のみ（既定）
  - legacy: 防災は受講日から直接5年、附則2号は5年ルールを要件としない
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

DisasterRule = Literal['fiscal_anchored', 'direct']


@dataclass(frozen=True, slots=True)
class DeadlinePolicy:
    name: str
    disaster_rule: DisasterRule
    override_requires_five_year: bool


STRICT_POLICY = DeadlinePolicy(
    name='strict',
    disaster_rule='fiscal_anchored',
    override_requires_five_year=True,
)

LEGACY_POLICY = DeadlinePolicy(
    name='legacy',
    disaster_rule='direct',
    override_requires_five_year=False,
)

DEFAULT_POLICY = STRICT_POLICY

POLICIES: dict[str, DeadlinePolicy] = {
    p.name: p for p in (STRICT_POLICY, LEGACY_POLICY)
}


def get_policy(name: str) -> DeadlinePolicy:
    """設定値の名前からポリシーを返す。未定義なら ValueError。"""
    try:
        return POLICIES[name]
    except KeyError:
        raise ValueError(
            f'不明な計算ポリシー: {name}（{", ".join(POLICIES)} のいずれか）'
        ) from None
