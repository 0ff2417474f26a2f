from flask import current_app, has_app_context
from rq import Retry

from ..extensions import db, rq
from ..models.feedback import Feedback
from ..models.interview import Interview


def _score(value):
    try:
        v = float(value)
    except (TypeError, ValueError):
        return None
    return max(0.0, min(5.0, v))


def _category_from_analysis(section):
    """{'clarity': {'score': 4.4, 'feedback': '...'}} -> stored feedback map"""
    out = {}
    for name, entry in (section or {}).items():
        if not isinstance(entry, dict):
            continue
        out[name] = {'score': _score(entry.get('score')), 'comments': entry.get('feedback') or entry.get('comments') or ''}
    return out


def feedback_from_analysis(interview, analysis):
    insights = [str(x) for x in analysis.get('keyInsights') or []]
    return Feedback(
        interview_id=interview.id,
        user_id=interview.user_id,
        kind='ai',
        overall_rating=_score(analysis.get('overallScore')),
        content_feedback=_category_from_analysis(analysis.get('contentAnalysis')),
        delivery_feedback=_category_from_analysis(analysis.get('deliveryAnalysis')),
        technical_feedback=_category_from_analysis(analysis.get('technicalAnalysis')),
        strengths=insights,
        improvements=[str(x) for x in analysis.get('improvementAreas') or []],
        general_comments='Automated analysis of the interview transcript.',
    )


def _run_analyze_interview(interview_id: int):
    """Analyse a transcript and fold the result into the owner's plan as ``ai`` feedback.

    Safe to run more than once per interview: stored analysis is reused, at
    most one ``ai`` feedback row is created by this job, and a run that failed
    after saving that row finishes the plan update on retry.
    """
    interview = db.session.get(Interview, interview_id)
    if interview is None:
        current_app.logger.warning('Analysis requested for missing interview %s', interview_id)
        return None

    fb = Feedback.query.filter_by(interview_id=interview_id, kind='ai').order_by(Feedback.id).first()
    if fb is not None and fb.plan_applied:
        current_app.logger.info('Interview %s already analysed (feedback %s)', interview_id, fb.id)
        return fb.id

    if not interview.analysis_results:
        client = current_app.extensions['analysis_client']
        interview.analysis_results = client({
            'transcript': interview.transcript,
            'questions': interview.question_texts(),
            'industry': interview.industry,
            'job_title': interview.job_title,
        })
        db.session.commit()

    if fb is None:
        fb = feedback_from_analysis(interview, interview.analysis_results)
        db.session.add(fb)
        db.session.commit()
    else:
        current_app.logger.info('Resuming plan update for feedback %s of interview %s', fb.id, interview_id)

    current_app.extensions['plan_accumulator'].accumulate(interview.user_id, fb)
    current_app.logger.info('Analysis of transcript completed for interview %s', interview_id)
    return fb.id


def analyze_interview(interview_id: int):
    """Job entrypoint; workers get an app context, inline calls reuse the caller's."""
    if has_app_context():
        return _run_analyze_interview(interview_id)
    from careerzoom import create_app
    app = create_app()
    with app.app_context():
        return _run_analyze_interview(interview_id)


def enqueue_analysis(interview_id: int):
    return rq.enqueue(
        analyze_interview,
        interview_id,
        job_id=f"analyze-interview-{interview_id}",
        retry=Retry(max=3, interval=[10, 30, 60]),
        job_timeout=600,
    )
