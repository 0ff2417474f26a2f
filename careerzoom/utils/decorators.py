from flask import abort
from flask_login import current_user

from ..extensions import db
from ..models.interview import Interview


def load_interview(interview_id, allow_peers=False):
    """Fetch an interview the current user may act on, or abort 404/403."""
    interview = db.get_or_404(Interview, interview_id, description="Interview not found")
    if interview.is_owner(current_user.id):
        return interview
    if allow_peers and interview.is_peer_reviewer(current_user.id):
        return interview
    abort(403, description="Not authorized to access this interview")


