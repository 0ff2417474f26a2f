from ..extensions import db
from .base import TimestampMixin

QUESTION_TYPES = ("behavioral", "technical", "situational", "case-study")


class Question(db.Model, TimestampMixin):
    """A bank question; public ones are offered by industry and job title."""
    __tablename__ = "questions"

    id = db.Column(db.Integer, primary_key=True)
    text = db.Column(db.Text, nullable=False)
    industry = db.Column(db.String(120), nullable=False, index=True)
    job_title = db.Column(db.String(120), nullable=False)
    difficulty = db.Column(db.String(20), default="intermediate", nullable=False)
    type = db.Column(db.String(20), nullable=False)  # behavioral/technical/situational/case-study
    sample_answer = db.Column(db.Text)
    keywords = db.Column(db.JSON)
    created_by = db.Column(db.Integer, db.ForeignKey("users.id"))
    is_public = db.Column(db.Boolean, default=True, nullable=False)

    def to_dict(self, brief=False):
        if brief:
            return {"id": self.id, "text": self.text, "type": self.type, "difficulty": self.difficulty}
        return {
            "id": self.id,
            "text": self.text,
            "industry": self.industry,
            "jobTitle": self.job_title,
            "difficulty": self.difficulty,
            "type": self.type,
            "sampleAnswer": self.sample_answer,
            "keywords": self.keywords or [],
            "isPublic": bool(self.is_public),
        }

    def __repr__(self) -> str:
        return f"<Question id={self.id} industry={self.industry} type={self.type}>"
