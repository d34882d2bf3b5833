from src.app.services.reset_token_service import password_fingerprint


def test_reset_token_round_trip(reset_tokens, make_user):
    user = make_user()

    claims = reset_tokens.verify(reset_tokens.issue(user))

    assert claims.is_ok()
    assert claims.value.user_id == user.id
    assert claims.value.password_fingerprint == password_fingerprint(user.password_hash)
    assert reset_tokens.matches_user(claims.value, user)


def test_reset_token_stops_matching_after_password_change(
    reset_tokens, password_hasher, make_user
):
    user = make_user()
    claims = reset_tokens.verify(reset_tokens.issue(user)).value

    user.password_hash = password_hasher.hash("BrandNewPass456!")

    assert not reset_tokens.matches_user(claims, user)


def test_refresh_token_is_not_a_reset_token(reset_tokens, token_issuer, make_user):
    pair = token_issuer.issue_pair(make_user())

    assert reset_tokens.verify(pair.refresh_token).error.code == "TOKEN_INVALID"
