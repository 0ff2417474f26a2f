from flask import current_app, request, jsonify, abort
from flask_login import login_required, current_user
from . import bp
from ...extensions import db
from ...models.feedback import Feedback
from ...models.improvement_plan import ImprovementPlan
from ...services.improvement import format_plan, starter_plan
from ...utils.decorators import load_interview
from ...utils.forms import form_from_json, validate_form
from .forms import FeedbackForm, parse_feedback_payload


@bp.post("/<int:interview_id>/feedback")
@login_required
def save_feedback(interview_id):
    interview = load_interview(interview_id, allow_peers=True)
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        abort(400, description="Request body must be a JSON object")

    maps, lists, extra_errors = parse_feedback_payload(payload)
    form = validate_form(form_from_json(FeedbackForm, payload), extra_errors)
    if form.type.data == "self" and not interview.is_owner(current_user.id):
        abort(403, description="Only the interview owner can submit self feedback")

    fb = Feedback(
        interview_id=interview.id,
        user_id=current_user.id,
        kind=form.type.data,
        overall_rating=form.overallRating.data,
        content_feedback=maps["content"],
        delivery_feedback=maps["delivery"],
        technical_feedback=maps["technical"],
        strengths=lists["strengths"],
        improvements=lists["improvements"],
        general_comments=form.generalComments.data or None,
    )
    db.session.add(fb)
    # the feedback row stands on its own even if the plan update has to retry
    db.session.commit()

    current_app.extensions['plan_accumulator'].accumulate(interview.user_id, fb)
    return jsonify(fb.to_dict()), 201


@bp.get("/<int:interview_id>/feedback")
@login_required
def list_feedback(interview_id):
    load_interview(interview_id, allow_peers=True)
    items = (
        Feedback.query.filter_by(interview_id=interview_id)
        .order_by(Feedback.created_at.desc(), Feedback.id.desc())
        .all()
    )
    return jsonify([f.to_dict() for f in items])


@bp.get("/<int:interview_id>/improvement-plan")
@login_required
def improvement_plan(interview_id):
    interview = load_interview(interview_id)
    if not interview.feedback:
        return jsonify(starter_plan(interview, current_user.id))

    accumulator = current_app.extensions['plan_accumulator']
    # feedback whose plan update never committed (conflict, crash, imported data)
    for fb in [f for f in interview.feedback if not f.plan_applied]:
        current_app.logger.info('Applying pending feedback %s to the plan of user %s', fb.id, interview.user_id)
        accumulator.accumulate(interview.user_id, fb)

    plan = ImprovementPlan.query.filter_by(user_id=interview.user_id).first()
    if plan is None:
        plan = accumulator.accumulate(interview.user_id, interview.feedback[0])
    return jsonify(format_plan(plan, interview))
