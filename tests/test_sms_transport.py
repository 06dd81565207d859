import pytest
import requests

from config import Settings
from sms import (
    MelipayamakSmsTransport,
    SmsConfigurationError,
    SmsTransportError,
    TransportConfig,
    is_valid_iran_mobile,
    normalize_phone,
)
from sms.transport import DEFAULT_REST_URL, DEFAULT_SOAP_URL, normalize_sms_url


class FakeResponse:
    def __init__(self, status_code=200, text="ok"):
        self.status_code = status_code
        self.text = text


class FakeSession:
    def __init__(self, responses=None, error=None):
        self.responses = list(responses or [])
        self.error = error
        self.calls = []

    def post(self, url, timeout=None, **kwargs):
        self.calls.append({"url": url, "timeout": timeout, **kwargs})
        if self.error is not None:
            raise self.error
        return self.responses.pop(0) if self.responses else FakeResponse()


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("09123456789", "09123456789"),
        ("9123456789", "09123456789"),
        ("+98 912 345 6789", "09123456789"),
        ("00989123456789", "09123456789"),
        ("۰۹۱۲۳۴۵۶۷۸۹", "09123456789"),
        ("", ""),
        (None, ""),
        ("12345", "12345"),
    ],
)
def test_normalize_phone(raw, expected):
    assert normalize_phone(raw) == expected


def test_mobile_validator():
    assert is_valid_iran_mobile("09123456789")
    assert not is_valid_iran_mobile("0912345678")
    assert not is_valid_iran_mobile("08123456789")
    assert not is_valid_iran_mobile("")


def test_provider_urls_are_completed():
    assert normalize_sms_url("https://rest.payamak-panel.com/api/SendSMS/", "rest") == DEFAULT_REST_URL
    assert normalize_sms_url("https://api.payamak-panel.com/post/send.asmx", "soap") == DEFAULT_SOAP_URL
    assert normalize_sms_url("https://sms.example.com/send", "rest") == "https://sms.example.com/send"
    assert normalize_sms_url("not a url", "rest") == "not a url"


def test_rest_send_posts_json_per_recipient():
    session = FakeSession()
    config = TransportConfig(api_key="key", sender_number="3000", body_id="77")
    MelipayamakSmsTransport(config, session=session).send(["09121111111", "09122222222", "09121111111"], "hi")

    assert [call["json"]["to"] for call in session.calls] == ["09121111111", "09122222222"]
    payload = session.calls[0]["json"]
    assert session.calls[0]["url"] == DEFAULT_REST_URL
    assert payload["apiKey"] == "key"
    assert payload["bodyId"] == "77"
    assert payload["from"] == "3000"
    assert "username" not in payload


def test_soap_send_posts_form():
    session = FakeSession()
    config = TransportConfig(mode="SOAP", username="u", password="p", sender_number="3000", is_flash=True)
    MelipayamakSmsTransport(config, session=session).send(["09121111111"], "salam")

    call = session.calls[0]
    assert call["url"] == DEFAULT_SOAP_URL
    assert call["data"]["isflash"] == "true"
    assert call["data"]["username"] == "u"
    assert call["headers"]["Content-Type"].startswith("application/x-www-form-urlencoded")


def test_incomplete_settings_raise_before_any_request():
    session = FakeSession()
    with pytest.raises(SmsConfigurationError):
        MelipayamakSmsTransport(TransportConfig(api_key="key"), session=session).send(["09121111111"], "x")
    with pytest.raises(SmsConfigurationError):
        MelipayamakSmsTransport(TransportConfig(sender_number="3000", username="u"), session=session).send(
            ["09121111111"], "x"
        )
    assert session.calls == []


def test_http_errors_raise_transport_error():
    session = FakeSession(responses=[FakeResponse(500, "server error")])
    transport = MelipayamakSmsTransport(TransportConfig(api_key="k", sender_number="3000"), session=session)
    with pytest.raises(SmsTransportError) as excinfo:
        transport.send(["09121111111", "09122222222"], "x")
    assert excinfo.value.status_code == 500
    assert len(session.calls) == 1


def test_network_errors_raise_transport_error():
    session = FakeSession(error=requests.ConnectionError("refused"))
    transport = MelipayamakSmsTransport(TransportConfig(api_key="k", sender_number="3000"), session=session)
    with pytest.raises(SmsTransportError):
        transport.send(["09121111111"], "x")


def test_settings_build_transport_config(monkeypatch):
    monkeypatch.setenv("SMS_MODE", "soap")
    monkeypatch.setenv("SMS_USERNAME", " user ")
    monkeypatch.setenv("SMS_PASSWORD", "secret")
    monkeypatch.setenv("SMS_SENDER_NUMBER", "5000")
    monkeypatch.setenv("SMS_IS_FLASH", "true")

    config = Settings().transport_config()
    assert config.mode == "soap"
    assert config.username == "user"
    assert config.is_flash is True
    assert config.uses_soap
    config.require_complete()
