from flask import request, jsonify
from flask_login import login_required
from . import bp
from ...services.questions import list_industries, find_questions


@bp.get("/industries")
@login_required
def industries():
    return jsonify(list_industries())


@bp.get("/industry/<path:industry>")
@login_required
def industry_questions(industry):
    items = find_questions(
        industry,
        job_title=request.args.get("jobTitle"),
        difficulty=request.args.get("difficulty"),
        qtype=request.args.get("type"),
    )
    return jsonify([q.to_dict() for q in items])
