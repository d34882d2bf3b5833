from src.api.utils.refresh_token_sources import (
    RefreshTokenExtractor,
    TokenCarrier,
    body_source,
    cookie_source,
    default_extractor,
    header_source,
)


def test_cookie_wins_over_body_and_header():
    carrier = TokenCarrier(
        cookies={"refresh_token": "from-cookie"},
        body={"refresh_token": "from-body"},
        headers={"X-Refresh-Token": "from-header"},
    )

    assert default_extractor("refresh_token").extract(carrier) == "from-cookie"


def test_body_wins_over_header():
    carrier = TokenCarrier(
        body={"refresh_token": "from-body"},
        headers={"x-refresh-token": "from-header"},
    )

    assert default_extractor("refresh_token").extract(carrier) == "from-body"


def test_header_fallback():
    carrier = TokenCarrier(headers={"x-refresh-token": "from-header"})

    assert default_extractor("refresh_token").extract(carrier) == "from-header"


def test_empty_values_are_skipped():
    carrier = TokenCarrier(
        cookies={"refresh_token": ""},
        body={"refresh_token": 123},
        headers={"X-Refresh-Token": "from-header"},
    )

    assert default_extractor("refresh_token").extract(carrier) == "from-header"


def test_nothing_found():
    assert default_extractor("refresh_token").extract(TokenCarrier()) is None


def test_custom_order():
    extractor = RefreshTokenExtractor(
        [header_source(), body_source("token"), cookie_source("rt")]
    )
    carrier = TokenCarrier(cookies={"rt": "c"}, body={"token": "b"})

    assert extractor.extract(carrier) == "b"
