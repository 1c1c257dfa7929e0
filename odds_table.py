import json
import os
import time
from typing import Any, Dict, List

import pandas as pd

from bet_areas import build_bet_areas
from odds import PlacedBet, evaluate
from roulette_wheels import as_wheel_type, total_slots

# ============================================================================
# GLOBAL PARAMETERS
# ============================================================================
DEFAULT_STAKE = 1
RESULTS_DIR = "results"
WHEEL_NAMES = ["european", "american"]

KIND_ORDER = ["inside", "outside", "special"]


# ============================================================================
# TABLE BUILDERS
# ============================================================================
def build_odds_table(wheel, stake: float = DEFAULT_STAKE) -> pd.DataFrame:
    """One row per bet area with its exact odds for the given stake."""
    n_slots = total_slots(wheel)
    records = []
    for area in build_bet_areas(wheel):
        result = evaluate(PlacedBet(area.id, area.id, stake), area, n_slots)
        records.append({
            "id": area.id,
            "label": area.label,
            "kind": area.kind,
            "coverage": len(area.covered),
            "payout": area.payout,
            "win_probability": result.win_probability,
            "win_probability_percent": result.win_probability_percent,
            "expected_value": result.expected_value,
            "house_edge": result.house_edge,
            "risk_reward_ratio": result.risk_reward_ratio,
            "best_case": result.best_case,
            "worst_case": result.worst_case,
        })
    return pd.DataFrame(records)


def summarize_by_kind(df: pd.DataFrame) -> pd.DataFrame:
    """House edge range and area count per bet kind."""
    summary = (
        df.groupby("kind")
        .agg(
            areas=("id", "count"),
            min_house_edge=("house_edge", "min"),
            max_house_edge=("house_edge", "max"),
        )
        .reindex([k for k in KIND_ORDER if k in set(df["kind"])])
    )
    return summary


# ============================================================================
# JSON OUTPUT
# ============================================================================
def generate_filename(wheel, stake: float) -> str:
    return f"odds_{as_wheel_type(wheel).value}_stake={stake}.json"


def save_odds_table(wheel, output_dir: str = RESULTS_DIR, stake: float = DEFAULT_STAKE) -> str:
    """Save the odds table of a wheel to a JSON file."""
    os.makedirs(output_dir, exist_ok=True)

    df = build_odds_table(wheel, stake)
    output: Dict[str, Any] = {
        "metadata": {
            "wheel": as_wheel_type(wheel).value,
            "total_slots": total_slots(wheel),
            "stake": stake,
            "n_areas": len(df),
        },
        "areas": df.to_dict(orient="records"),
    }

    filepath = os.path.join(output_dir, generate_filename(wheel, stake))
    with open(filepath, "w") as f:
        json.dump(output, f, indent=2)

    return filepath


# ============================================================================
# MAIN RUNNER
# ============================================================================
def run_all_tables(output_dir: str = RESULTS_DIR, verbose: bool = True) -> List[str]:
    """Build and save the odds table of every wheel."""
    paths = []
    for idx, wheel_name in enumerate(WHEEL_NAMES):
        filepath = save_odds_table(wheel_name, output_dir)
        paths.append(filepath)

        if verbose:
            summary = summarize_by_kind(build_odds_table(wheel_name))
            print(f"[{idx + 1}/{len(WHEEL_NAMES)}] {wheel_name} wheel "
                  f"({total_slots(wheel_name)} slots)")
            for kind, row in summary.iterrows():
                print(f"    -> {kind}: {int(row['areas'])} areas, house edge "
                      f"{row['min_house_edge']:.2%} - {row['max_house_edge']:.2%}")
            print(f"    -> Saved to: {filepath}")

    return paths


# ============================================================================
# ENTRY POINT
# ============================================================================
if __name__ == "__main__":
    start_time = time.time()
    run_all_tables()
    end_time = time.time()
    print(f"\nTotal execution time: {end_time - start_time:.2f} seconds")
