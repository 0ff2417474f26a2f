from flask import current_app, request, jsonify, abort
from flask_login import login_required, current_user
from . import bp
from ...extensions import db
from ...models.interview import Interview, interview_peer_reviewers
from ...models.user import User
from ...jobs.analyze import enqueue_analysis
from ...services.questions import select_questions
from ...utils.decorators import load_interview
from ...utils.forms import form_from_json, validate_form
from .forms import InterviewForm, EndInterviewForm, PeerInviteForm


def _json_body():
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        abort(400, description="Request body must be a JSON object")
    return payload


def _queued_response(interview, job):
    body = interview.to_dict()
    # RQ returns a Job; the synchronous fallback returns the feedback id
    body["analysisJobId"] = getattr(job, "id", None)
    return body


@bp.post("")
@login_required
def create_interview():
    form = validate_form(form_from_json(InterviewForm, _json_body()))
    i = Interview(
        user_id=current_user.id,
        title=form.title.data,
        description=form.description.data or None,
        industry=form.industry.data,
        job_title=form.jobTitle.data,
        difficulty=form.difficulty.data or "intermediate",
        interview_date=form.interviewDate.data,
        duration=form.duration.data or 30,
        status="scheduled",
    )
    i.questions = select_questions(i.industry, i.job_title, i.difficulty)
    db.session.add(i)
    db.session.commit()
    current_app.logger.info('Interview %s scheduled by user %s', i.id, current_user.id)
    return jsonify(i.to_dict()), 201


@bp.get("")
@login_required
def list_interviews():
    query = Interview.query.filter_by(user_id=current_user.id)
    status = request.args.get('status')
    if status:
        query = query.filter(Interview.status == status)
    items = query.order_by(Interview.interview_date.desc(), Interview.id.desc()).all()
    return jsonify([i.to_dict() for i in items])


@bp.get("/invitations")
@login_required
def peer_invitations():
    items = (
        Interview.query.join(interview_peer_reviewers, interview_peer_reviewers.c.interview_id == Interview.id)
        .filter(interview_peer_reviewers.c.user_id == current_user.id)
        .order_by(Interview.interview_date.desc(), Interview.id.desc())
        .all()
    )
    return jsonify([{
        "id": i.id,
        "title": i.title,
        "description": i.description,
        "industry": i.industry,
        "jobTitle": i.job_title,
        "interviewDate": i.to_dict()["interviewDate"],
        "status": i.status,
    } for i in items])


@bp.get("/<int:interview_id>")
@login_required
def get_interview(interview_id):
    interview = load_interview(interview_id, allow_peers=True)
    return jsonify(interview.to_dict())


@bp.delete("/<int:interview_id>")
@login_required
def delete_interview(interview_id):
    interview = load_interview(interview_id)
    db.session.delete(interview)
    db.session.commit()
    return jsonify({"message": "Interview deleted", "id": interview_id})


@bp.post("/<int:interview_id>/start")
@login_required
def start_interview(interview_id):
    interview = load_interview(interview_id)
    if interview.status != "scheduled":
        abort(409, description=f"Cannot start an interview that is {interview.status}")
    interview.status = "in-progress"
    db.session.commit()
    return jsonify(interview.to_dict())


@bp.post("/<int:interview_id>/end")
@login_required
def end_interview(interview_id):
    interview = load_interview(interview_id)
    if interview.status not in ("scheduled", "in-progress"):
        abort(409, description=f"Cannot end an interview that is {interview.status}")
    form = validate_form(form_from_json(EndInterviewForm, _json_body()))

    interview.status = "completed"
    if form.transcript.data:
        interview.transcript = form.transcript.data
        interview.transcript_completed = True
    if form.recordingUrl.data:
        interview.recording_url = form.recordingUrl.data
    db.session.commit()

    job = None
    min_chars = current_app.config.get('ANALYSIS_MIN_TRANSCRIPT_CHARS', 100)
    if interview.transcript and len(interview.transcript) > min_chars:
        try:
            job = enqueue_analysis(interview.id)
            current_app.logger.info('Queued transcript analysis for interview %s', interview.id)
        except Exception:
            # the interview is already completed; analysis can be requested again
            current_app.logger.exception('Failed to enqueue analysis for interview %s', interview.id)
    db.session.refresh(interview)
    return jsonify(_queued_response(interview, job))


@bp.post("/<int:interview_id>/analyze")
@login_required
def analyze(interview_id):
    interview = load_interview(interview_id)
    if not interview.transcript:
        abort(400, description="No transcript available for analysis")
    job = enqueue_analysis(interview.id)
    db.session.refresh(interview)
    return jsonify(_queued_response(interview, job)), 202


@bp.post("/<int:interview_id>/peer-invite")
@login_required
def invite_peer(interview_id):
    interview = load_interview(interview_id)
    form = validate_form(form_from_json(PeerInviteForm, _json_body()))
    peer = User.query.filter_by(email=form.email.data).first()
    if peer is None:
        abort(404, description="User not found with that email")
    if peer.id == interview.user_id:
        abort(400, description="You cannot invite yourself")
    if interview.is_peer_reviewer(peer.id):
        abort(400, description="User is already a peer reviewer")
    interview.peer_reviewers.append(peer)
    db.session.commit()
    current_app.logger.info('User %s invited to review interview %s', peer.id, interview.id)
    return jsonify(interview.to_dict())
