"""防火・防災管理 再講習期限の判定

判定の流れ:
  1. 防火の基本期限
     - 選任日の4年前より前に防火受講 → 選任日から1年以内
     - 選任日の4年前以降に防火受講 → 防火受講日の次の4月1日から5年以内
  2. 附則2号（防災受講あり・防災受講日が防火受講日より後・防火が5年ルール）
     防火期限 < 防災期限 なら、防災受講日の次の4月1日から5年に延長
  3. 防災も判定する場合は防火・防災の早い方。ただし附則2号が適用された
     場合は延長後の防火期限を優先する
"""

from __future__ import annotations

import logging
from datetime import date

from core.models import DeadlineResult, DisasterResult, Evaluation, MissingInput
from core.policy import DEFAULT_POLICY, DeadlinePolicy
from utils.date_calc import add_years, next_fiscal_year_start, previous_day
from utils.date_fmt import format_date

logger = logging.getLogger(__name__)

YEARS_BEFORE_SENNIN = -4
YEARS_FOR_LIMIT = 5
ONE_YEAR = 1

MSG_FIRE_REQUIRED = '防火受講日・選任日が空欄または不正な値です'
MSG_DISASTER_REQUIRED = '防災管理講習受講日が空欄または不正な値です'

# 期限計算とタイムライン表示で date の範囲を超えない入力年
# （選任日の4年前〜次の4月1日から5年後、表示の前後余白を含む）
MIN_INPUT_YEAR = date.min.year - YEARS_BEFORE_SENNIN + 1
MAX_INPUT_YEAR = date.max.year - YEARS_FOR_LIMIT - 1


def _is_usable(d: date | None) -> bool:
    return d is not None and MIN_INPUT_YEAR <= d.year <= MAX_INPUT_YEAR


def _fmt(d: date) -> str:
    return format_date(d, 'yyyy/MM/dd')


def five_year_limit(training: date) -> date:
    """受講日の次の4月1日から5年後の前日。"""
    return previous_day(add_years(next_fiscal_year_start(training), YEARS_FOR_LIMIT))


def one_year_limit(appointment: date) -> date:
    """選任日から1年後の前日。"""
    return previous_day(add_years(appointment, ONE_YEAR))


def disaster_five_year_window(
    disaster_training: date, policy: DeadlinePolicy = DEFAULT_POLICY,
) -> tuple[date, date]:
    """防災の5年ルールの起算日と期限。起算方法は policy.disaster_rule に従う。"""
    if policy.disaster_rule == 'direct':
        return disaster_training, previous_day(add_years(disaster_training, YEARS_FOR_LIMIT))
    return next_fiscal_year_start(disaster_training), five_year_limit(disaster_training)


def _is_outside_lookback(training: date, appointment: date) -> bool:
    """受講日が選任日の4年前より前なら True（4年前ちょうどは範囲内）。"""
    return add_years(appointment, YEARS_BEFORE_SENNIN) > training


def calculate_limit(fire_training: date, appointment: date) -> DeadlineResult:
    """防火管理の基本期限を返す。"""
    if _is_outside_lookback(fire_training, appointment):
        limit = one_year_limit(appointment)
        logger.debug('防火: 選任から1年ルール (%s)', limit)
        return DeadlineResult(
            limit_date=limit,
            message=f'選任から1年以内に受講が必要({_fmt(limit)})',
            is_five_year=False,
        )
    limit = five_year_limit(fire_training)
    logger.debug('防火: 次の4月1日から5年ルール (%s)', limit)
    return DeadlineResult(
        limit_date=limit,
        message=f'防火受講日の次の４月１日から５年以内に受講が必要({_fmt(limit)})',
        is_five_year=True,
    )


def calculate_disaster_limit(
    disaster_training: date,
    appointment: date,
    policy: DeadlinePolicy = DEFAULT_POLICY,
) -> DisasterResult:
    """防災管理の期限を返す。5年側の起算方法は policy.disaster_rule に従う。"""
    if _is_outside_lookback(disaster_training, appointment):
        limit = one_year_limit(appointment)
        return DisasterResult(
            limit_date=limit,
            message=f'選任から1年以内に受講が必要({_fmt(limit)})',
            is_five_year=False,
        )
    _start, limit = disaster_five_year_window(disaster_training, policy)
    if policy.disaster_rule == 'direct':
        message = f'防災受講日から５年以内に受講が必要({_fmt(limit)})'
    else:
        message = f'防災受講日の次の４月１日から５年以内に受講が必要({_fmt(limit)})'
    return DisasterResult(limit_date=limit, message=message, is_five_year=True)


def apply_fusoku2(
    fire: DeadlineResult,
    fire_training: date,
    disaster_training: date | None,
    appointment: date,
    policy: DeadlinePolicy = DEFAULT_POLICY,
) -> DeadlineResult:
    """附則2号の特例を判定し、適用される場合は延長後の結果を返す。

    適用されない場合は fire をそのまま返す。
    """
    if disaster_training is None or not disaster_training > fire_training:
        return fire
    if policy.override_requires_five_year and not fire.is_five_year:
        logger.debug('附則2号: 防火が選任から1年ルールのため対象外')
        return fire

    disaster = calculate_disaster_limit(disaster_training, appointment, policy)
    if not fire.limit_date < disaster.limit_date:
        return fire

    extended = five_year_limit(disaster_training)
    if not extended > fire.limit_date:
        return fire

    logger.debug('附則2号適用: %s → %s', fire.limit_date, extended)
    return DeadlineResult(
        limit_date=extended,
        message=(
            f'防災管理新規講習（{_fmt(disaster_training)}）の次の４月１日から'
            f'５年以内に受講が必要({_fmt(extended)})'
        ),
        is_five_year=fire.is_five_year,
        fusoku2_applied=True,
    )


def evaluate(
    fire_training: date | None,
    appointment: date | None,
    disaster_training: date | None = None,
    check_disaster: bool = False,
    policy: DeadlinePolicy = DEFAULT_POLICY,
) -> Evaluation | MissingInput:
    """3つの日付から受講期限を判定する。

    防災受講日は check_disaster=True の場合のみ参照する。
    必須の日付が欠けている場合や、年が MIN_INPUT_YEAR〜MAX_INPUT_YEAR の
    範囲外の場合は MissingInput を返し、計算は行わない。
    """
    if not (_is_usable(fire_training) and _is_usable(appointment)):
        missing = tuple(
            name for name, value in (
                ('fire_training', fire_training), ('appointment', appointment),
            ) if not _is_usable(value)
        )
        return MissingInput(fields=missing, message=MSG_FIRE_REQUIRED)
    if check_disaster and not _is_usable(disaster_training):
        return MissingInput(fields=('disaster_training',), message=MSG_DISASTER_REQUIRED)
    if not check_disaster:
        disaster_training = None

    base_fire = calculate_limit(fire_training, appointment)
    fire = base_fire
    disaster = None
    limit = fire.limit_date

    if disaster_training is not None:
        fire = apply_fusoku2(fire, fire_training, disaster_training, appointment, policy)
        disaster = calculate_disaster_limit(disaster_training, appointment, policy)
        if fire.fusoku2_applied:
            limit = fire.limit_date
        else:
            limit = min(fire.limit_date, disaster.limit_date)

    logger.info(
        '期限判定: 防火受講=%s 選任=%s 防災受講=%s → %s (附則2号=%s, ポリシー=%s)',
        fire_training, appointment, disaster_training, limit,
        fire.fusoku2_applied, policy.name,
    )
    return Evaluation(
        fire_training=fire_training,
        appointment=appointment,
        disaster_training=disaster_training,
        base_fire=base_fire,
        fire=fire,
        disaster=disaster,
        limit_date=limit,
        policy=policy,
    )
