from flask_wtf import FlaskForm
from wtforms import StringField, TextAreaField, SelectField, IntegerField, DateTimeField
from wtforms.validators import DataRequired, Email, Length, NumberRange, Optional
from ...models.interview import DIFFICULTIES

DATETIME_FORMATS = ['%Y-%m-%dT%H:%M:%S.%fZ', '%Y-%m-%dT%H:%M:%SZ', '%Y-%m-%dT%H:%M:%S', '%Y-%m-%dT%H:%M', '%Y-%m-%d %H:%M']


class InterviewForm(FlaskForm):
    title = StringField("Title", validators=[DataRequired(), Length(max=200)])
    description = TextAreaField("Description", validators=[Optional()])
    industry = StringField("Industry", validators=[DataRequired(), Length(max=120)])
    jobTitle = StringField("Job title", validators=[DataRequired(), Length(max=120)])
    difficulty = SelectField("Difficulty", choices=[(d, d) for d in DIFFICULTIES], default="intermediate")
    interviewDate = DateTimeField("Date", format=DATETIME_FORMATS, validators=[Optional()])
    duration = IntegerField("Duration (minutes)", default=30, validators=[Optional(), NumberRange(min=5, max=240)])


class EndInterviewForm(FlaskForm):
    transcript = TextAreaField("Transcript", validators=[Optional()])
    recordingUrl = StringField("Recording URL", validators=[Optional(), Length(max=512)])


class PeerInviteForm(FlaskForm):
    email = StringField("Peer email", validators=[DataRequired(), Email()])
