from ..extensions import db
from .base import iso

KINDS = ("ai", "peer", "self")
# stored maps, in the order scores are read from them
CATEGORIES = ("content", "delivery", "technical")


class Feedback(db.Model):
    """One evaluation of one interview by one author. Never updated."""
    __tablename__ = "feedback"

    id = db.Column(db.Integer, primary_key=True)
    interview_id = db.Column(db.Integer, db.ForeignKey("interviews.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    kind = db.Column(db.String(10), nullable=False)  # ai/peer/self
    overall_rating = db.Column(db.Float)

    # {"clarity": {"score": 4, "comments": "..."}, ...}
    content_feedback = db.Column(db.JSON)
    delivery_feedback = db.Column(db.JSON)
    technical_feedback = db.Column(db.JSON)

    strengths = db.Column(db.JSON)
    improvements = db.Column(db.JSON)
    general_comments = db.Column(db.Text)
    # set in the same commit that folds this record into the owner's plan
    plan_applied = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, server_default=db.func.now(), nullable=False)

    interview = db.relationship("Interview", back_populates="feedback")
    author = db.relationship("User", lazy="joined")

    def category_maps(self):
        """Yield (category, map) for the three scored categories."""
        yield "content", self.content_feedback or {}
        yield "delivery", self.delivery_feedback or {}
        yield "technical", self.technical_feedback or {}

    def to_dict(self):
        author = None
        if self.author is not None:
            author = {
                "id": self.author.id,
                "firstName": self.author.first_name,
                "lastName": self.author.last_name,
                "email": self.author.email,
            }
        return {
            "id": self.id,
            "interviewId": self.interview_id,
            "user": author,
            "type": self.kind,
            "overallRating": self.overall_rating,
            "contentFeedback": self.content_feedback or {},
            "deliveryFeedback": self.delivery_feedback or {},
            "technicalFeedback": self.technical_feedback or {},
            "strengths": self.strengths or [],
            "improvements": self.improvements or [],
            "generalComments": self.general_comments,
            "createdAt": iso(self.created_at),
        }

    def __repr__(self) -> str:
        return f"<Feedback id={self.id} interview_id={self.interview_id} kind={self.kind}>"
