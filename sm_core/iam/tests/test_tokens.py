# sm_core/iam/tests/test_tokens.py
import uuid
from datetime import timedelta

import pytest

from sm_core.common.api.exceptions import InvalidToken, MalformedAuth, MissingAuth
from sm_core.iam.tokens import ZERO_UUID, TokenService


def _issue(**kwargs):
    return TokenService.generate(user_id=uuid.uuid4(), username="ana", email="ana@example.com", **kwargs)


def test_no_tenant_token_has_no_tenant_claim():
    claims = TokenService.validate(_issue().token)
    assert claims.tenant_id is None
    assert not claims.has_tenant
    assert claims.role == ""


def test_zero_uuid_tenant_is_treated_as_absent():
    claims = TokenService.validate(_issue(tenant_id=ZERO_UUID).token)
    assert claims.tenant_id is None


def test_tenant_token_round_trips_claims():
    tid = uuid.uuid4()
    issued = _issue(tenant_id=tid, role="Teacher")
    claims = TokenService.validate(issued.token)

    assert claims.tenant_id == tid
    assert claims.role == "Teacher"
    assert claims.username == "ana"
    assert claims.email == "ana@example.com"
    assert claims.expires_at == issued.expires_at
    assert claims.issued_at <= claims.expires_at


def test_expired_token_is_invalid():
    issued = _issue(lifetime=timedelta(seconds=-1))
    with pytest.raises(InvalidToken):
        TokenService.validate(issued.token)


def test_tampered_token_is_invalid():
    token = _issue().token
    head, payload, sig = token.split(".")
    with pytest.raises(InvalidToken):
        TokenService.validate(f"{head}.{payload}x.{sig}")


@pytest.mark.parametrize(
    "header, exc",
    [
        ("", MissingAuth),
        (None, MissingAuth),
        ("Basic abc", MalformedAuth),
        ("Bearer", MalformedAuth),
        ("Bearer a b", MalformedAuth),
    ],
)
def test_extract_from_header_rejects(header, exc):
    with pytest.raises(exc):
        TokenService.extract_from_header(header)


@pytest.mark.parametrize("scheme", ["Bearer", "bearer", "BEARER"])
def test_extract_from_header_scheme_is_case_insensitive(scheme):
    assert TokenService.extract_from_header(f"{scheme} abc.def.ghi") == "abc.def.ghi"
