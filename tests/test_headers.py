from datetime import datetime, timedelta, timezone

from suplog.bugsnag.headers import prefixed_headers


def test_header_names_and_fixed_values():
    headers = prefixed_headers("placeholder", "4")
    assert set(headers) == {
        "Content-Type",
        "Bugsnag-Api-Key",
        "Bugsnag-Payload-Version",
        "Bugsnag-Sent-At",
    }
    assert headers["Content-Type"] == "application/json"


def test_api_key_and_version_pass_through():
    headers = prefixed_headers("placeholder", "5")
    assert headers["Bugsnag-Api-Key"] == "placeholder"
    assert headers["Bugsnag-Payload-Version"] == "5"


def test_sent_at_is_current_utc_time():
    before = datetime.now(timezone.utc).replace(microsecond=0)
    sent_at = prefixed_headers("placeholder", "1")["Bugsnag-Sent-At"]
    after = datetime.now(timezone.utc)
    assert sent_at.endswith("Z")
    parsed = datetime.strptime(sent_at, "%Y-%m-%dT%H:%M:%SZ").replace(
        tzinfo=timezone.utc
    )
    assert before <= parsed <= after + timedelta(seconds=1)