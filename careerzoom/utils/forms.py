from werkzeug.datastructures import ImmutableMultiDict

from ..errors import ValidationError


def _formvalue(v):
    if isinstance(v, bool):
        return 'true' if v else 'false'
    return str(v)


def form_from_json(form_cls, payload):
    """Bind a FlaskForm to a JSON object instead of request.form.

    Scalars are stringified the way a browser would submit them; nested
    objects and nulls are left out for the caller to handle.
    """
    data = []
    for key, value in (payload or {}).items():
        if value is None or isinstance(value, dict):
            continue
        if isinstance(value, list):
            data.extend((key, _formvalue(v)) for v in value if v is not None and not isinstance(v, (dict, list)))
        else:
            data.append((key, _formvalue(value)))
    return form_cls(formdata=ImmutableMultiDict(data))


def validate_form(form, extra_errors=None):
    """Raise ValidationError with the form's and any extra errors."""
    ok = form.validate()
    errors = dict(form.errors)
    errors.update(extra_errors or {})
    if not ok or errors:
        raise ValidationError(errors)
    return form
