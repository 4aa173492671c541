import re

import flask
from eth_utils import is_address, to_checksum_address
from flask_marshmallow.schema import Schema
from marshmallow import EXCLUDE
from marshmallow.fields import Field, String

from token_service.constants import MAX_UINT256

DECIMAL_INTEGER = re.compile(r"-?[0-9]+")


def request_parameters() -> dict:
    """Collect the parameters of the current request into a single :class:`dict`.

    Query string, form data and a JSON object body are merged, in that order,
    later sources overriding earlier ones.
    """
    parameters = flask.request.values.to_dict()
    body = flask.request.get_json(silent=True)
    if isinstance(body, dict):
        parameters.update(body)
    return parameters


class SPSchema(Schema):
    """A :class:`.Schema` providing a convenience method for validation and deserialization.

    Unknown fields are ignored, since parameters may arrive mixed from query
    string and request body.
    """

    class Meta:
        unknown = EXCLUDE

    def validate_and_deserialize(self, data_obj) -> dict:
        """Validate `data_obj` and deserialize its fields to native python objects.

        If validation fails, this raises a :exc:`werkzeug.exceptions.BadRequest`,
        ending the request sequence.

        :raises werkzeug.exceptions.BadRequest:
            if validating the `data_obj` did not succeed.
        """
        errors = self.validate(data_obj)
        if errors:
            flask.abort(400, str(errors))
        return self.load(data_obj)


class ChecksumAddressField(String):
    """A field for (de)serializing account addresses from and to their EIP-55 checksum form."""

    default_error_messages = {
        "empty": "Must not be empty!",
        "not_address": "Must be a 20-byte hex encoded address!",
    }

    def _deserialize(self, value, attr, data, **kwargs) -> str:
        if not value:
            raise self.make_error("empty")

        deserialized_string = super(ChecksumAddressField, self)._deserialize(
            value, attr, data, **kwargs
        )
        if not is_address(deserialized_string):
            raise self.make_error("not_address")
        return to_checksum_address(deserialized_string)

    def _serialize(self, value, attr, obj, **kwargs):
        if value is None:
            return None
        return to_checksum_address(value)


class TokenAmountField(Field):
    """A field for (de)serializing token amounts.

    Amounts are loaded from :class:`int` or decimal :class:`str` values only;
    floats are rejected, since they cannot represent large amounts exactly.
    Values must fit a `uint256`.

    Amounts are dumped as decimal strings, so they survive JSON parsers limited
    to double precision.
    """

    default_error_messages = {
        "invalid": "Must be an integer or a string of decimal digits!",
        "negative": "Must not be negative!",
        "too_large": f"Must not exceed {MAX_UINT256}!",
    }

    def _deserialize(self, value, attr, data, **kwargs) -> int:
        if isinstance(value, bool):
            raise self.make_error("invalid")

        if isinstance(value, str):
            stripped = value.strip()
            if not DECIMAL_INTEGER.fullmatch(stripped):
                raise self.make_error("invalid")
            if len(stripped.lstrip("-0")) > len(str(MAX_UINT256)):
                raise self.make_error("too_large")
            value = int(stripped)
        elif not isinstance(value, int):
            raise self.make_error("invalid")

        if value < 0:
            raise self.make_error("negative")
        if value > MAX_UINT256:
            raise self.make_error("too_large")
        return value

    def _serialize(self, value, attr, obj, **kwargs):
        if value is None:
            return None
        return str(value)


class HexQuantityField(Field):
    """A dump-only field rendering integers as `0x`-prefixed hex strings, e.g. receipt statuses."""

    def _serialize(self, value, attr, obj, **kwargs):
        if value is None:
            return None
        return hex(value)
