from flask_wtf import FlaskForm
from wtforms import SelectField, FloatField, TextAreaField
from wtforms.validators import DataRequired, NumberRange, Optional, Length
from ...models.feedback import KINDS, CATEGORIES

MAP_FIELDS = {f"{c}Feedback": c for c in CATEGORIES}
LIST_FIELDS = ("strengths", "improvements")


class FeedbackForm(FlaskForm):
    type = SelectField("Type", choices=[(k, k) for k in KINDS], validators=[DataRequired()])
    overallRating = FloatField("Overall rating", validators=[Optional(), NumberRange(min=0, max=5)])
    generalComments = TextAreaField("General comments", validators=[Optional(), Length(max=5000)])


def _valid_score(score):
    return score is None or (
        isinstance(score, (int, float)) and not isinstance(score, bool) and 0 <= score <= 5
    )


def parse_category_map(raw, field):
    """Validate one {subcategory: {score, comments}} map; return (cleaned, errors)."""
    if raw is None:
        return {}, []
    if not isinstance(raw, dict):
        return {}, [f"{field} must be an object"]
    cleaned, errors = {}, []
    for name, entry in raw.items():
        if entry is None:
            continue
        if not isinstance(entry, dict):
            errors.append(f"{field}.{name} must be an object")
            continue
        score = entry.get("score")
        if not _valid_score(score):
            errors.append(f"{field}.{name}.score must be a number between 0 and 5")
            continue
        cleaned[name] = {"score": score, "comments": entry.get("comments") or entry.get("comment") or ""}
    return cleaned, errors


def parse_feedback_payload(payload):
    """Nested maps and string lists that the flat form cannot carry."""
    maps, errors = {}, {}
    for field, category in MAP_FIELDS.items():
        cleaned, errs = parse_category_map(payload.get(field), field)
        maps[category] = cleaned
        if errs:
            errors[field] = errs
    lists = {}
    for field in LIST_FIELDS:
        raw = payload.get(field)
        if raw is None:
            lists[field] = []
        elif isinstance(raw, list) and all(isinstance(x, str) for x in raw):
            lists[field] = [x for x in raw if x.strip()]
        else:
            errors[field] = [f"{field} must be a list of strings"]
    return maps, lists, errors
