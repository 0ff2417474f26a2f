from ..extensions import db
from .base import TimestampMixin, iso

STATUSES = ("scheduled", "in-progress", "completed", "cancelled")
DIFFICULTIES = ("beginner", "intermediate", "advanced")

interview_peer_reviewers = db.Table(
    "interview_peer_reviewers",
    db.Column("interview_id", db.Integer, db.ForeignKey("interviews.id", ondelete="CASCADE"), primary_key=True),
    db.Column("user_id", db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)

interview_questions = db.Table(
    "interview_questions",
    db.Column("interview_id", db.Integer, db.ForeignKey("interviews.id", ondelete="CASCADE"), primary_key=True),
    db.Column("question_id", db.Integer, db.ForeignKey("questions.id", ondelete="CASCADE"), primary_key=True),
)


class Interview(db.Model, TimestampMixin):
    __tablename__ = "interviews"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)

    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    industry = db.Column(db.String(120), nullable=False)
    job_title = db.Column(db.String(120), nullable=False)
    difficulty = db.Column(db.String(20), default="intermediate")
    interview_date = db.Column(db.DateTime)
    duration = db.Column(db.Integer, default=30)  # minutes
    status = db.Column(db.String(20), default="scheduled", nullable=False)  # scheduled/in-progress/completed/cancelled

    transcript = db.Column(db.Text)
    transcript_completed = db.Column(db.Boolean, default=False)
    recording_url = db.Column(db.String(512))
    analysis_results = db.Column(db.JSON)

    peer_reviewers = db.relationship("User", secondary=interview_peer_reviewers, lazy="selectin")
    questions = db.relationship("Question", secondary=interview_questions, order_by="Question.id", lazy="selectin")
    feedback = db.relationship("Feedback", back_populates="interview", cascade="all, delete-orphan",
                               order_by="Feedback.id", lazy="selectin")

    def is_owner(self, user_id) -> bool:
        return self.user_id == user_id

    def is_peer_reviewer(self, user_id) -> bool:
        return any(u.id == user_id for u in self.peer_reviewers)

    def question_texts(self):
        return [q.text for q in self.questions if q.text]

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "title": self.title,
            "description": self.description,
            "industry": self.industry,
            "jobTitle": self.job_title,
            "difficulty": self.difficulty,
            "interviewDate": iso(self.interview_date),
            "duration": self.duration,
            "status": self.status,
            "transcriptCompleted": bool(self.transcript_completed),
            "hasTranscript": bool(self.transcript),
            "hasRecording": bool(self.recording_url),
            "analysisResults": self.analysis_results,
            "questions": [q.to_dict(brief=True) for q in self.questions],
            "peerReviewers": [u.id for u in self.peer_reviewers],
            "feedback": [f.id for f in self.feedback],
            "createdAt": iso(self.created_at),
        }

    def __repr__(self) -> str:
        return f"<Interview id={self.id} user_id={self.user_id} status={self.status}>"
