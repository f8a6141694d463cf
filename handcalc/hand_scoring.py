from __future__ import annotations

from handcalc.fu import calculate_fu, fu_breakdown, total_fu
from handcalc.hand import build_hand
from handcalc.logging import get_logger
from handcalc.payment import calculate, calculate_yakuman, point_label, yakuman_label
from handcalc.schemas import (
    ContextInput,
    DoraBreakdown,
    HandInput,
    Payments,
    RuleSet,
    ScoreResult,
    YakuItem,
)
from handcalc.validators import validate_conditions
from handcalc.yaku import evaluate_yaku

logger = get_logger()


def score_hand_shape(hand_input: HandInput, context: ContextInput, rules: RuleSet | None = None) -> ScoreResult:
    """Hand shape -> score. Errors from parsing, validation and yaku evaluation propagate."""
    rules = rules or RuleSet()
    hand = build_hand(hand_input)
    validate_conditions(hand, context)

    yaku, yaku_han = evaluate_yaku(hand, context, rules)
    if any(item.yakuman for item in yaku):
        units = yaku_han
        logger.debug("yakuman path selected", units=units)
        return ScoreResult(
            han=units,
            fu=0,
            yaku=yaku,
            point_label=yakuman_label(units),
            payments=calculate_yakuman(units, context.honba, rules),
            honba=context.honba,
            is_open=hand.is_open,
            yakuman=True,
        )

    dora = DoraBreakdown(
        dora=context.dora,
        aka_dora=hand.red_five_count if rules.aka_ari else 0,
    )
    if dora.dora > 0:
        yaku.append(YakuItem(name="Dora", han=dora.dora))
    if dora.aka_dora > 0:
        yaku.append(YakuItem(name="Aka Dora", han=dora.aka_dora))
    han = yaku_han + dora.dora + dora.aka_dora

    fu_types = calculate_fu(hand, context.is_tsumo, rules)
    fu = total_fu(fu_types)
    logger.debug("hand scored", han=han, fu=fu, is_open=hand.is_open)
    return ScoreResult(
        han=han,
        fu=fu,
        yaku=yaku,
        fu_breakdown=fu_breakdown(fu_types),
        dora=dora,
        point_label=point_label(han, fu, rules),
        payments=calculate(han, fu, context.honba, rules),
        honba=context.honba,
        is_open=hand.is_open,
    )


def score_manual(han: int, fu: int, honba: int = 0, rules: RuleSet | None = None) -> Payments:
    """Calculator mode: payments straight from han and fu, fu taken as given."""
    return calculate(han, fu, honba, rules)
