"""Worker scoring rules.

Each rule is a pure function ``(worker, template, context) -> float`` that
returns an additive adjustment. A worker's score for a template is the
policy's base score plus the sum of the rules, floored at the policy
minimum. Rules read the day being filled from ``context.current_date``.
"""

from typing import Callable, Sequence

from shiftplanner.domain.models import ShiftCategory, ShiftTemplate, Worker
from shiftplanner.scheduling.context import AssignmentContext

ScoringRule = Callable[[Worker, ShiftTemplate, AssignmentContext], float]


def target_headroom_rule(
    worker: Worker, template: ShiftTemplate, context: AssignmentContext
) -> float:
    """Reward workers with hours left before their weekly target.

    Workers who would land well past their target after this shift are
    penalized per hour of overage.
    """
    policy = context.scoring_policy
    current = context.current_hours(worker.id)
    target = context.target_hours(worker)
    shift_hours = template.duration_hours
    new_total = current + shift_hours
    remaining = max(0.0, target - current)

    if remaining >= shift_hours:
        return policy.full_headroom_bonus
    if remaining > 0:
        return policy.partial_headroom_bonus
    if new_total <= target + policy.slight_overage_hours:
        return policy.slight_overage_bonus
    if new_total <= target + policy.moderate_overage_hours:
        return 0.0
    return -(new_total - target) * policy.overage_penalty_per_hour


def load_balance_rule(
    worker: Worker, template: ShiftTemplate, context: AssignmentContext
) -> float:
    """Favor workers furthest below their proportional load."""
    current = context.current_hours(worker.id)
    target = context.target_hours(worker)
    ratio = current / max(target, 1.0)
    return (1 - ratio) * context.scoring_policy.balance_weight


def role_priority_rule(
    worker: Worker, template: ShiftTemplate, context: AssignmentContext
) -> float:
    """Opening and closing go preferably to workers with higher percentages."""
    if template.category in (ShiftCategory.OPENING, ShiftCategory.CLOSING):
        return worker.work_percentage * context.scoring_policy.role_priority_weight
    return 0.0


def consecutive_day_rule(
    worker: Worker, template: ShiftTemplate, context: AssignmentContext
) -> float:
    """Soft penalty for working the day before or after."""
    if context.current_date is None:
        return 0.0
    if context.works_adjacent_day(worker.id, context.current_date):
        return -context.scoring_policy.consecutive_day_penalty
    return 0.0


def fresh_worker_rule(
    worker: Worker, template: ShiftTemplate, context: AssignmentContext
) -> float:
    """Spread first assignments across the team."""
    if context.current_hours(worker.id) == 0:
        return context.scoring_policy.fresh_worker_bonus
    return 0.0


DEFAULT_RULES: tuple[ScoringRule, ...] = (
    target_headroom_rule,
    load_balance_rule,
    role_priority_rule,
    consecutive_day_rule,
    fresh_worker_rule,
)


def rules_for(prioritize_work_balance: bool = True) -> tuple[ScoringRule, ...]:
    """Default rule chain, optionally without the load-balance term."""
    if prioritize_work_balance:
        return DEFAULT_RULES
    return tuple(rule for rule in DEFAULT_RULES if rule is not load_balance_rule)


def score_worker(
    worker: Worker,
    template: ShiftTemplate,
    context: AssignmentContext,
    rules: Sequence[ScoringRule] = DEFAULT_RULES,
) -> float:
    """Base score plus every rule, never below the policy minimum."""
    policy = context.scoring_policy
    score = policy.base_score
    for rule in rules:
        score += rule(worker, template, context)
    return max(policy.min_score, score)


def rank_candidates(
    candidates: Sequence[Worker],
    template: ShiftTemplate,
    context: AssignmentContext,
    rules: Sequence[ScoringRule] = DEFAULT_RULES,
) -> list[tuple[Worker, float]]:
    """Score candidates and sort best first.

    The sort is stable, so workers with equal scores keep their candidate
    order.
    """
    scored = [(worker, score_worker(worker, template, context, rules)) for worker in candidates]
    return sorted(scored, key=lambda item: item[1], reverse=True)
