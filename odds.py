"""
Exact odds and expected value for roulette wagers.

Probabilities are reduced with integer gcd so the reported fraction is exact.
Expected values are closed form for a single area; several areas are combined
by evaluating net profit on every slot of the wheel, each slot equally likely.
"""
import logging
import math
import numbers
from dataclasses import asdict, dataclass
from typing import Dict, Iterable, List, Mapping, NamedTuple, Optional

import numpy as np

from bet_areas import BetArea
from exceptions import InvalidStake, UnknownArea
from roulette_wheels import WheelType, as_wheel_type, slots_for

logger = logging.getLogger(__name__)

MULTIPLE_PROBABILITY = "Multiple"
VARIOUS_RATIO = "Various"


# ============================================================================
# DATA CLASSES
# ============================================================================
@dataclass(frozen=True)
class PlacedBet:
    id: str
    area_id: str
    amount: float


@dataclass
class PreciseRiskReward:
    bet_type: str
    stake: float
    win_probability: str
    win_probability_percent: Optional[float]
    payout: Optional[int]
    expected_value: float
    house_edge: float
    risk_reward_ratio: str
    best_case: float
    worst_case: float

    @property
    def is_combined(self) -> bool:
        # Combined results carry no single win probability
        return self.win_probability == MULTIPLE_PROBABILITY

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


class ExactProbability(NamedTuple):
    numerator: int
    denominator: int
    decimal: float


@dataclass
class OutcomeDistribution:
    slots: List[object]
    net: np.ndarray
    total_stake: float
    expected_value: float
    p_win: float
    p_lose: float
    p_break_even: float
    max_win: float
    max_loss: float
    std_dev: float


# ============================================================================
# HELPERS
# ============================================================================
def exact_probability(winning_numbers: int, total_numbers: int) -> ExactProbability:
    """Reduce winning/total to lowest terms."""
    if total_numbers <= 0:
        raise ValueError(f"Total slots must be positive, got {total_numbers}")
    divisor = math.gcd(winning_numbers, total_numbers)
    return ExactProbability(
        numerator=winning_numbers // divisor,
        denominator=total_numbers // divisor,
        decimal=winning_numbers / total_numbers
    )


def validate_stake(amount):
    """Return the stake unchanged, or raise InvalidStake."""
    if isinstance(amount, bool) or not isinstance(amount, numbers.Real):
        raise InvalidStake(amount, f"Stake must be a number, got {amount!r}")
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidStake(amount)
    return amount


def group_stakes(bets: Iterable[PlacedBet]) -> Dict[str, float]:
    """Sum stakes per area id, keeping the order areas were first bet on."""
    stakes = {}
    for bet in bets:
        amount = validate_stake(bet.amount)
        stakes[bet.area_id] = stakes.get(bet.area_id, 0) + amount
    return stakes


def _resolve_areas(stakes, area_lookup):
    areas = {}
    for area_id in stakes:
        if area_id not in area_lookup:
            raise UnknownArea(area_id)
        areas[area_id] = area_lookup[area_id]
    return areas


def _outcome_space(total_slots):
    for wheel in WheelType:
        slots = slots_for(wheel)
        if len(slots) == total_slots:
            return slots
    raise ValueError(f"No roulette wheel has {total_slots} slots")


def _net_profit(stakes, areas, slots):
    # Net profit of the whole table for each slot
    net = np.zeros(len(slots), dtype=float)
    for area_id, stake in stakes.items():
        area = areas[area_id]
        stake = float(stake)
        wins = np.array([area.covers(slot) for slot in slots], dtype=bool)
        if int(wins.sum()) != len(area.covered):
            raise ValueError(f"Bet area {area_id} covers slots missing from a {len(slots)}-slot wheel")
        net += np.where(wins, area.payout * stake, -stake)
    return net


# ============================================================================
# SINGLE BET
# ============================================================================
def evaluate(bet: PlacedBet, area: BetArea, total_slots: int) -> PreciseRiskReward:
    """
    Exact risk/reward of one wager on one area.

    EV = stake * (p_win * payout - p_lose). The best case is the profit on a
    win, the stake itself is not included.
    """
    stake = validate_stake(bet.amount)
    if not area.covered:
        raise ValueError(f"Bet area {area.id} covers no slots")

    winning_numbers = len(area.covered)
    if winning_numbers > total_slots:
        raise ValueError(
            f"Bet area {area.id} covers {winning_numbers} slots, wheel has {total_slots}"
        )

    prob = exact_probability(winning_numbers, total_slots)
    win_prob = prob.decimal
    lose_prob = 1 - win_prob

    expected_value = stake * (win_prob * area.payout - lose_prob)
    house_edge = -expected_value / stake

    return PreciseRiskReward(
        bet_type=area.label,
        stake=stake,
        win_probability=f"{prob.numerator}/{prob.denominator}",
        win_probability_percent=win_prob * 100,
        payout=area.payout,
        expected_value=expected_value,
        house_edge=house_edge,
        risk_reward_ratio=f"1:{area.payout}",
        best_case=area.payout * stake,
        worst_case=-stake
    )


# ============================================================================
# MULTIPLE BETS
# ============================================================================
def aggregate(
    bets: Iterable[PlacedBet],
    area_lookup: Mapping[str, BetArea],
    total_slots: int
) -> Optional[PreciseRiskReward]:
    """
    Combine every placed bet into one result.

    Bets on the same area are merged into one stake. A single area gives the
    same result as evaluate(). Several areas are evaluated over the joint
    outcome space; the result then has no single win probability or payout.

    best_case is the sum of each area's best case. Those wins generally cannot
    all happen on one spin, use outcome_distribution() for the best jointly
    achievable result.

    Raises UnknownArea if any bet names an area missing from area_lookup.
    """
    stakes = group_stakes(bets)
    if not stakes:
        return None

    areas = _resolve_areas(stakes, area_lookup)

    if len(stakes) == 1:
        area_id, amount = next(iter(stakes.items()))
        return evaluate(PlacedBet(area_id, area_id, amount), areas[area_id], total_slots)

    slots = _outcome_space(total_slots)
    net = _net_profit(stakes, areas, slots)

    total_stake = sum(stakes.values())
    expected_value = float(net.mean())
    best_case = sum(areas[area_id].payout * stake for area_id, stake in stakes.items())

    logger.debug(
        "Aggregated %d areas, total stake %s, EV %.6f", len(stakes), total_stake, expected_value
    )

    return PreciseRiskReward(
        bet_type=f"{len(stakes)} Combined Bets",
        stake=total_stake,
        win_probability=MULTIPLE_PROBABILITY,
        win_probability_percent=None,
        payout=None,
        expected_value=expected_value,
        house_edge=abs(expected_value) / total_stake,
        risk_reward_ratio=VARIOUS_RATIO,
        best_case=best_case,
        worst_case=-total_stake
    )


def outcome_distribution(
    bets: Iterable[PlacedBet],
    area_lookup: Mapping[str, BetArea],
    wheel
) -> Optional[OutcomeDistribution]:
    """
    Net profit of all bets for every slot of the wheel.

    Unlike aggregate(), max_win and max_loss here are results a single spin
    can actually produce.
    """
    stakes = group_stakes(bets)
    if not stakes:
        return None

    areas = _resolve_areas(stakes, area_lookup)
    slots = slots_for(as_wheel_type(wheel))
    net = _net_profit(stakes, areas, slots)
    n = len(slots)
    total_stake = sum(stakes.values())

    # Rounding tolerance scales with the amount on the table
    break_even = np.isclose(net, 0.0, rtol=0.0, atol=float(total_stake) * 1e-12)
    wins = (net > 0) & ~break_even
    losses = (net < 0) & ~break_even

    return OutcomeDistribution(
        slots=slots,
        net=net,
        total_stake=total_stake,
        expected_value=float(net.mean()),
        p_win=int(wins.sum()) / n,
        p_lose=int(losses.sum()) / n,
        p_break_even=int(break_even.sum()) / n,
        max_win=float(net.max()),
        max_loss=float(net.min()),
        std_dev=float(net.std())
    )


def total_expected_value(
    bets: Iterable[PlacedBet],
    area_lookup: Mapping[str, BetArea],
    total_slots: int
) -> float:
    """Sum of per-area expected values. EV is linear, so overlaps do not matter."""
    stakes = group_stakes(bets)
    areas = _resolve_areas(stakes, area_lookup)
    return sum(
        (
            evaluate(PlacedBet(area_id, area_id, stake), areas[area_id], total_slots).expected_value
            for area_id, stake in stakes.items()
        ),
        0.0
    )
