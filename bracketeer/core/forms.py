"""Shared form plumbing for the JSON endpoints."""

import math

from flask_wtf import FlaskForm  # type: ignore
from wtforms import Field, StringField

from bracketeer.errors import ValidationError


class ApiForm(FlaskForm):
    """Form populated from a JSON request body.

    The API is stateless and sessionless, so CSRF tokens do not apply.
    """

    class Meta:
        csrf = False


class JSONStringField(StringField):
    """A string field that refuses JSON numbers, booleans and objects."""

    def process_formdata(self, valuelist):
        value = valuelist[0] if valuelist else None
        if value is not None and not isinstance(value, str):
            raise ValueError(self.gettext("Not a valid string value."))
        super().process_formdata(valuelist)


class JSONNumberField(Field):
    """A field holding a JSON number exactly as it was sent.

    Numeric strings, booleans, NaN and infinities are rejected. With
    ``integer=True`` only whole JSON integers are accepted. A missing value or
    ``null`` leaves ``data`` as None.
    """

    def __init__(self, label=None, validators=None, integer=False, **kwargs):
        super().__init__(label, validators, **kwargs)
        self.integer = integer

    def _value(self):
        return "" if self.data is None else str(self.data)

    def process_formdata(self, valuelist):
        if not valuelist or valuelist[0] is None:
            return
        value = valuelist[0]
        allowed = int if self.integer else (int, float)
        if isinstance(value, bool) or not isinstance(value, allowed):
            kind = "integer" if self.integer else "number"
            raise ValueError(self.gettext(f"Not a valid {kind}."))
        if not math.isfinite(value):
            raise ValueError(self.gettext("Must be a finite number."))
        self.data = value


def validate_form(form):
    """Validate a form or raise a ValidationError listing every field error."""
    if form.validate():
        return form
    messages = []
    for field_name, errors in form.errors.items():
        for error in errors:
            messages.append(f"{field_name}: {error}")
    raise ValidationError("; ".join(messages) or "Validation failed.")
