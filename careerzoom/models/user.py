from ..extensions import db
from flask_login import UserMixin
from .base import TimestampMixin, iso
from werkzeug.security import generate_password_hash, check_password_hash

class User(db.Model, UserMixin, TimestampMixin):
    __tablename__ = "users"
    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    first_name = db.Column(db.String(120))
    last_name = db.Column(db.String(120))
    role = db.Column(db.String(50), default="student")
    # set once the first feedback creates the plan
    improvement_plan_id = db.Column(db.Integer)  # improvement_plans.id

    def set_password(self, raw):
        self.password_hash = generate_password_hash(raw)

    def check_password(self, raw):
        return check_password_hash(self.password_hash, raw)

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "role": self.role,
            "improvementPlanId": self.improvement_plan_id,
            "createdAt": iso(self.created_at),
        }

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"
