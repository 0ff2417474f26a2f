"""Improvement-plan aggregation.

Feedback flows through ``extract_scores`` and ``classify_areas`` into
``PlanAccumulator.accumulate``, which folds it into the owner's single
persistent ImprovementPlan. ``format_plan`` and ``starter_plan`` build the
client view on the read path.
"""

from decimal import Decimal, ROUND_FLOOR
from typing import List, Tuple

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm.exc import StaleDataError

from ..extensions import db
from ..models.base import iso
from ..models.improvement_plan import ImprovementPlan
from ..models.user import User

# fixed policy: below WEAK is weak, at or above STRONG is strong, between is neutral
WEAK_THRESHOLD = 3
STRONG_THRESHOLD = 4

DEFAULT_NEXT_STEPS = (
    'Schedule another practice interview',
    'Review feedback from your previous interviews',
    'Focus on your highest priority improvement areas',
)


class PlanConflictError(Exception):
    """Concurrent writers kept winning the optimistic-lock race."""


def round_half_up(value, places: int = 2) -> float:
    """Round halves toward +inf: 12.345 -> 12.35, -33.335 -> -33.33."""
    scale = Decimal(10) ** places
    shifted = (Decimal(str(value)) * scale + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR)
    return float(shifted / scale)


def _entry_score(entry):
    # absent, null and zero scores all count as "not scored"
    if not isinstance(entry, dict):
        return None
    score = entry.get('score')
    if isinstance(score, bool) or not isinstance(score, (int, float)) or not score:
        return None
    return score


def _scored_entries(feedback):
    for category, entries in feedback.category_maps():
        for name, entry in entries.items():
            score = _entry_score(entry)
            if score is not None:
                yield category, name, score


def extract_scores(feedback) -> List[float]:
    """Every present sub-category score, content then delivery then technical."""
    return [score for _, _, score in _scored_entries(feedback)]


def classify_areas(feedback) -> Tuple[List[str], List[str]]:
    """Return (weak, strong) area tags like ``content_clarity``."""
    weak, strong = [], []
    for category, name, score in _scored_entries(feedback):
        tag = f"{category}_{name}"
        if score < WEAK_THRESHOLD:
            weak.append(tag)
        elif score >= STRONG_THRESHOLD:
            strong.append(tag)
    return weak, strong


def average_score(scores) -> float:
    return sum(scores) / len(scores) if scores else 0.0


def _union(current, new):
    out = list(current or [])
    for tag in new:
        if tag not in out:
            out.append(tag)
    return out


def apply_feedback(plan, average, weak, strong, recommendations=None):
    """Fold one feedback's results into ``plan`` in memory."""
    previous = plan.latest_interview_score or 0
    plan.latest_interview_score = average
    # the very first feedback leaves improvement_percentage untouched
    if previous > 0:
        plan.improvement_percentage = round_half_up((average - previous) / previous * 100, 2)

    # JSON columns: assign new lists so the change is tracked
    plan.consistent_weak_areas = _union(plan.consistent_weak_areas, weak)
    plan.consistent_strength_areas = _union(plan.consistent_strength_areas, strong)
    if recommendations:
        plan.recommendations = list(plan.recommendations or []) + list(recommendations)
    return plan


class PlanAccumulator:
    """Folds feedback into per-user improvement plans.

    ``recommender`` is any callable taking a list of weak-area tags and
    returning recommendation dicts; it is consulted for ``ai`` feedback only
    and its failures never block the score and area update.
    """

    def __init__(self, recommender=None, max_retries: int = 3):
        self.recommender = recommender
        self.max_retries = max(1, int(max_retries))

    def get_or_create_plan(self, user_id) -> ImprovementPlan:
        plan = ImprovementPlan.query.filter_by(user_id=user_id).first()
        if plan is not None:
            return plan

        plan = ImprovementPlan(
            user_id=user_id,
            goals=[],
            recommendations=[],
            latest_interview_score=0.0,
            improvement_percentage=0.0,
            consistent_weak_areas=[],
            consistent_strength_areas=[],
        )
        try:
            with db.session.begin_nested():
                db.session.add(plan)
        except IntegrityError:
            # lost the race against another first-time creation for this user
            current_app.logger.info('Improvement plan for user %s created concurrently, reloading', user_id)
            return ImprovementPlan.query.filter_by(user_id=user_id).one()

        user = db.session.get(User, user_id)
        if user is not None:
            user.improvement_plan_id = plan.id
        current_app.logger.info('Created improvement plan %s for user %s', plan.id, user_id)
        return plan

    def recommend(self, weak_areas):
        if self.recommender is None or not weak_areas:
            return []
        try:
            recs = self.recommender(list(weak_areas))
        except Exception:
            current_app.logger.exception('Recommendation generation failed for %s; keeping existing recommendations', weak_areas)
            return []
        if not isinstance(recs, list):
            current_app.logger.warning('Recommendation generator returned %r, ignoring', type(recs).__name__)
            return []
        return recs

    def accumulate(self, user_id, feedback) -> ImprovementPlan:
        average = average_score(extract_scores(feedback))
        weak, strong = classify_areas(feedback)

        recommendations = []
        if feedback.kind == 'ai' and weak:
            recommendations = self.recommend(weak)

        for attempt in range(1, self.max_retries + 1):
            try:
                plan = self.get_or_create_plan(user_id)
                apply_feedback(plan, average, weak, strong, recommendations)
                # committed with the plan so an interrupted run can be resumed
                feedback.plan_applied = True
                db.session.commit()
                return plan
            except StaleDataError:
                db.session.rollback()
                current_app.logger.warning('Improvement plan for user %s changed underneath us, retry %s/%s',
                                           user_id, attempt, self.max_retries)
            except SQLAlchemyError:
                db.session.rollback()
                raise
        raise PlanConflictError(f'could not update improvement plan for user {user_id} after {self.max_retries} attempts')


def capitalize_first(s: str) -> str:
    return s[:1].upper() + s[1:] if s else s


def area_label(tag: str) -> str:
    """'content_structure' -> 'Structure'; tags without '_' are returned unchanged."""
    _, sep, specific = tag.partition('_')
    if not sep:
        return tag
    return capitalize_first(specific)


def format_score(score) -> str:
    return f"{round_half_up(score or 0, 1):.1f}"


def _focus_area(rec):
    resources = rec.get('resources') or []
    return {
        'title': capitalize_first(rec.get('area') or ''),
        'description': rec.get('description'),
        'recommendations': [r.get('title') for r in resources],
        'resources': [{'title': r.get('title'), 'type': capitalize_first(r.get('type') or '')} for r in resources],
    }


def format_plan(plan, interview) -> dict:
    strength_areas = [area_label(t) for t in plan.consistent_strength_areas or []]
    improvement_areas = [area_label(t) for t in plan.consistent_weak_areas or []]
    focus_areas = [_focus_area(rec) for rec in plan.recommendations or []]

    next_steps = [f"{g.get('description')} ({g.get('priority')} priority)" for g in plan.goals or []]
    if not next_steps:
        next_steps = list(DEFAULT_NEXT_STEPS)

    summary = (
        "Based on your interview performance, you've shown strengths in "
        f"{', '.join(strength_areas) if strength_areas else 'several areas'} "
        "but could benefit from improvement in "
        f"{', '.join(improvement_areas) if improvement_areas else 'certain aspects'}. "
        f"Your overall performance score is {format_score(plan.latest_interview_score)}/5. "
        "Focus on the recommended areas below to enhance your interview skills."
    )

    return {
        'id': plan.id,
        'interviewId': interview.id,
        'userId': plan.user_id,
        'createdAt': iso(plan.created_at),
        'summary': summary,
        'strengthAreas': strength_areas,
        'improvementAreas': improvement_areas,
        'focusAreas': focus_areas,
        'nextSteps': next_steps,
    }


STARTER_SUMMARY = (
    'This interview does not have feedback yet. To generate a personalized improvement plan, '
    'you need to either get AI feedback or peer feedback on your interview performance.'
)


def starter_plan(interview, user_id) -> dict:
    """Placeholder view for an interview that has no feedback yet. Never stored."""
    return {
        'id': 'starter-plan',
        'interviewId': interview.id,
        'userId': user_id,
        'createdAt': iso(interview.created_at),
        'summary': STARTER_SUMMARY,
        'strengthAreas': [],
        'improvementAreas': [],
        'focusAreas': [
            {
                'title': 'Complete Your Interview',
                'description': 'To get a personalized improvement plan, you need to complete your interview and receive feedback.',
                'recommendations': [
                    'Start the interview by clicking "Start Now" from the dashboard',
                    'Answer all the interview questions',
                    'After completing the interview, wait for AI feedback or invite peers to review',
                ],
                'resources': [
                    {'title': 'How to Get the Most from Mock Interviews', 'type': 'Guide'},
                    {'title': 'Interview Preparation Best Practices', 'type': 'Article'},
                ],
            }
        ],
        'nextSteps': [
            'Start your scheduled interview',
            'Complete all interview questions',
            'Request feedback from peers or use AI analysis',
        ],
    }
