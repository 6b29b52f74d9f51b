"""Bearer token issued by the Bambu Lab login endpoint."""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass, field

from bambucloud._constants import TOKEN_ALGORITHM
from bambucloud.exceptions import TokenError


@dataclass(frozen=True)
class Token:
    """A bearer credential and the account name extracted from its claims.

    Created once by :meth:`issue` after a successful login and never
    modified afterwards, so a single instance can be shared by concurrent
    requests.
    """

    jwt: str = field(repr=False)
    """Raw credential exactly as returned by the login endpoint."""

    username: str
    """The ``username`` claim, sent as the ``user-id`` header where required."""

    @classmethod
    def issue(cls, raw: str) -> Token:
        """Build a token from the raw login credential.

        The header and claims are decoded without verifying the signature
        or audience: the credential has just been received over TLS from
        the issuer, and no verification key is published for clients.

        Raises :class:`TokenError` if *raw* is not a JWT with an ``RS256``
        header and a string ``username`` claim.
        """
        header, claims = _decode_unverified(raw)
        alg = header.get("alg")
        if alg != TOKEN_ALGORITHM:
            raise TokenError(f"Unexpected token algorithm {alg!r}, expected {TOKEN_ALGORITHM}.")
        username = claims.get("username")
        if not isinstance(username, str):
            raise TokenError("Token claims have no 'username'.")
        return cls(jwt=raw, username=username)

    @property
    def bearer(self) -> str:
        """Value for the ``Authorization`` header."""
        return f"Bearer {self.jwt}"


def _decode_segment(segment: str) -> dict[str, object]:
    """Decode one base64url JWT segment into a JSON object."""
    # base64url padding: length must be a multiple of 4
    padded = segment + "=" * (-len(segment) % 4)
    try:
        data = json.loads(base64.urlsafe_b64decode(padded))
    except ValueError as e:
        raise TokenError(f"Malformed token segment: {e}") from e
    if not isinstance(data, dict):
        raise TokenError("Token segment is not a JSON object.")
    return data


def _decode_unverified(raw: str) -> tuple[dict[str, object], dict[str, object]]:
    """Split a JWT and return its ``(header, claims)`` without verification."""
    parts = raw.split(".")
    if len(parts) != 3 or not all(parts[:2]):
        raise TokenError("Credential is not a JWT.")
    return _decode_segment(parts[0]), _decode_segment(parts[1])
