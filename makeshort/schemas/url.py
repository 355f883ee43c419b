"""Short URL Marshmallow schemas."""

from __future__ import annotations

from marshmallow import Schema, ValidationError, fields, pre_load, validate, validates_schema

from makeshort.models.url import ALIAS_MAX_LENGTH

_alias_field = dict(
    validate=validate.Regexp(
        rf"^[A-Za-z0-9_-]{{1,{ALIAS_MAX_LENGTH}}}$",
        error="Alias may only contain letters, digits, '_' or '-'",
    )
)


class _BlankAsAbsentSchema(Schema):
    """Treat ``""`` in the optional string fields as if the key were absent."""

    blank_as_absent: tuple[str, ...] = ()

    @pre_load
    def _drop_blank(self, data, **kwargs):
        if not isinstance(data, dict):
            return data
        return {
            key: value
            for key, value in data.items()
            if not (key in self.blank_as_absent and isinstance(value, str) and not value.strip())
        }


class URLCreateSchema(_BlankAsAbsentSchema):
    """Input payload for ``POST /url``; a blank alias means "generate one"."""

    blank_as_absent = ("alias",)

    url = fields.Url(required=True, schemes={"http", "https"}, require_tld=False)
    alias = fields.String(load_default=None, allow_none=True, **_alias_field)


class URLUpdateSchema(_BlankAsAbsentSchema):
    """Input payload for ``PATCH /url/<id>``; at least one non-blank field is required."""

    blank_as_absent = ("url", "alias")

    url = fields.Url(load_default=None, allow_none=True, schemes={"http", "https"}, require_tld=False)
    alias = fields.String(load_default=None, allow_none=True, **_alias_field)

    @validates_schema
    def _require_change(self, data, **kwargs):
        if not data.get("url") and not data.get("alias"):
            raise ValidationError("Provide 'url' and/or 'alias'.")


class URLCreatedSchema(Schema):
    """Response for a freshly created short URL."""

    id = fields.Integer(required=True)
    url = fields.String(attribute="long_url")
    alias = fields.String()


class URLSchema(URLCreatedSchema):
    """Full short URL representation including the redirect counter."""

    redirects = fields.Integer(attribute="redirect_count")
