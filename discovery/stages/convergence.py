"""
Convergence: decide when the discovery loop stops and what it recommends.

Rules for should_stop, in order:
- empty distribution: never stop
- completed_rounds >= max_rounds: always stop (recommend best available)
- completed_rounds < min_rounds: never stop
- otherwise: top >= confidence_threshold and (top - second) >= gap_threshold

Also a coarse remaining-rounds estimate and the progress message built from it.
"""

from typing import Dict, List, Optional

from ..models.config import DEFAULT_CONFIG, DiscoveryConfig

# Threshold comparisons are inclusive; absorbs float error such as 0.6 - 0.4 < 0.2.
_TOLERANCE = 1e-9


def top_styles(distribution: Dict[str, float], n: int = 2) -> List[str]:
    """Style ids by descending score; equal scores are ordered by style id."""
    ranked = sorted(distribution.items(), key=lambda kv: (-kv[1], kv[0]))
    return [style for style, _ in ranked[: max(n, 0)]]


def second_best(distribution: Dict[str, float]) -> Optional[str]:
    """Second-ranked style, or None if fewer than two styles have nonzero scores."""
    ranked = top_styles(distribution, 2)
    if len(ranked) < 2 or distribution[ranked[1]] <= 0:
        return None
    return ranked[1]


def should_stop(
    distribution: Dict[str, float],
    completed_rounds: int,
    config: DiscoveryConfig = DEFAULT_CONFIG,
) -> bool:
    """True when the loop should stop and commit to a recommendation."""
    if not distribution:
        return False
    if completed_rounds >= config.max_rounds:
        return True
    if completed_rounds < config.min_rounds:
        return False

    ranked = top_styles(distribution, 2)
    top_score = distribution[ranked[0]]
    second_score = distribution[ranked[1]] if len(ranked) > 1 else 0.0

    has_high_confidence = top_score >= config.confidence_threshold - _TOLERANCE
    has_clear_winner = top_score - second_score >= config.gap_threshold - _TOLERANCE
    return has_high_confidence and has_clear_winner


def estimate_remaining_rounds(
    completed_rounds: int,
    distribution: Dict[str, float],
    config: DiscoveryConfig = DEFAULT_CONFIG,
) -> Optional[int]:
    """
    Coarse estimate of rounds left before convergence.

    Returns None (unknown) before estimation_min_rounds. Never increases as
    the top score rises or rounds accrue.
    """
    if completed_rounds < config.estimation_min_rounds:
        return None
    if not distribution:
        return config.estimation_default

    top_score = max(distribution.values())
    target = config.estimation_fallback_target
    for floor, band_target in config.estimation_bands:
        if top_score >= floor:
            target = band_target
            break
    return max(0, target - completed_rounds)


def progress_message(current_round: int, estimated_remaining: Optional[int]) -> str:
    """Human-readable progress line for the current round."""
    if estimated_remaining is None:
        return f"Round {current_round}"
    if estimated_remaining == 0:
        return f"Round {current_round} - Almost there!"
    if estimated_remaining <= 3:
        unit = "round" if estimated_remaining == 1 else "rounds"
        return f"Round {current_round} - About {estimated_remaining} more {unit}"
    low = max(1, estimated_remaining - 2)
    high = estimated_remaining + 2
    return f"Round {current_round} - About {low}-{high} more rounds"
