from .user import User
from .question import Question
from .interview import Interview, interview_peer_reviewers, interview_questions
from .feedback import Feedback
from .improvement_plan import ImprovementPlan
