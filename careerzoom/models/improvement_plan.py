from ..extensions import db
from .base import TimestampMixin

GOAL_AREAS = ("content", "delivery", "technical", "communication", "problem-solving")
GOAL_PRIORITIES = ("low", "medium", "high")
GOAL_STATUSES = ("not-started", "in-progress", "completed")
RESOURCE_TYPES = ("article", "video", "course", "book", "practice")


class ImprovementPlan(db.Model, TimestampMixin):
    __tablename__ = "improvement_plans"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)

    # [{"area", "description", "priority", "status", "deadline"}]
    goals = db.Column(db.JSON, nullable=False, default=list)
    # [{"area", "description", "resources": [{"title", "url", "type"}]}]
    recommendations = db.Column(db.JSON, nullable=False, default=list)

    # progress snapshot
    latest_interview_score = db.Column(db.Float, nullable=False, default=0.0)
    improvement_percentage = db.Column(db.Float, nullable=False, default=0.0)
    consistent_weak_areas = db.Column(db.JSON, nullable=False, default=list)
    consistent_strength_areas = db.Column(db.JSON, nullable=False, default=list)

    version_id = db.Column(db.Integer, nullable=False)

    __table_args__ = (
        db.UniqueConstraint('user_id', name='uq_improvement_plans_user'),
    )
    __mapper_args__ = {"version_id_col": version_id}

    def __repr__(self) -> str:
        return f"<ImprovementPlan id={self.id} user_id={self.user_id} v={self.version_id}>"
