"""
SMS delivery through the Melipayamak gateway.

Credentials are carried by a ``TransportConfig`` built once (usually from
``Settings``) and injected into the transport, so nothing here reads shared
settings at send time.
"""

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, List, Literal
from urllib.parse import urlparse, urlunparse

import requests
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger("sms_transport")

DEFAULT_REST_URL = "https://rest.payamak-panel.com/api/SendSMS/SendSMS"
DEFAULT_SOAP_URL = "https://api.payamak-panel.com/post/send.asmx/SendSimpleSMS2"

_REST_HOST_RE = re.compile(r"(^|\.)rest\.payamak-panel\.com$", re.IGNORECASE)
_SOAP_HOST_RE = re.compile(r"(^|\.)api\.payamak-panel\.com$", re.IGNORECASE)
_SOAP_PATH_RE = re.compile(r"/post/send\.asmx(/SendSimpleSMS2)?$", re.IGNORECASE)


class SmsConfigurationError(RuntimeError):
    """Raised when the SMS gateway settings are incomplete."""


class SmsTransportError(RuntimeError):
    """Raised when the gateway rejects a message or cannot be reached."""

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


def normalize_sms_url(url: str, mode: str) -> str:
    """Complete a bare provider endpoint with the method path the gateway expects."""
    if not url:
        return url
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.hostname:
        return url
    path = parsed.path.rstrip("/")
    if mode == "rest" and _REST_HOST_RE.search(parsed.hostname):
        if re.search(r"/api/SendSMS$", path, re.IGNORECASE):
            return urlunparse(parsed._replace(path=f"{path}/SendSMS"))
    if mode == "soap" and _SOAP_HOST_RE.search(parsed.hostname):
        if re.search(r"/post/send\.asmx$", path, re.IGNORECASE):
            return urlunparse(parsed._replace(path=f"{path}/SendSimpleSMS2"))
    return url


class TransportConfig(BaseModel):
    mode: Literal["rest", "soap"] = "rest"
    base_url: str | None = None
    username: str = ""
    password: str = ""
    api_key: str = ""
    sender_number: str = ""
    body_id: str = ""
    is_flash: bool = False
    timeout: float = Field(default=20.0, gt=0)

    @field_validator("mode", mode="before")
    @classmethod
    def fold_mode(cls, value: object) -> str:
        return "soap" if str(value or "").strip().lower() == "soap" else "rest"

    @field_validator("username", "password", "api_key", "sender_number", "body_id", mode="before")
    @classmethod
    def strip_text(cls, value: object) -> str:
        return "" if value is None else str(value).strip()

    @property
    def endpoint(self) -> str:
        default = DEFAULT_SOAP_URL if self.mode == "soap" else DEFAULT_REST_URL
        return normalize_sms_url((self.base_url or "").strip() or default, self.mode)

    @property
    def uses_soap(self) -> bool:
        return self.mode == "soap" or bool(_SOAP_PATH_RE.search(urlparse(self.endpoint).path))

    def require_complete(self) -> None:
        if not self.endpoint or not self.sender_number:
            raise SmsConfigurationError("تنظیمات ارسال پیامک ناقص است.")
        if not self.api_key and (not self.username or not self.password):
            raise SmsConfigurationError("نام کاربری/رمز عبور یا API Key برای پیامک کامل نیست.")


def unique_recipients(recipients: Iterable[str]) -> List[str]:
    seen: List[str] = []
    for recipient in recipients:
        value = str(recipient or "").strip()
        if value and value not in seen:
            seen.append(value)
    return seen


class SmsTransport(ABC):
    """Delivery boundary used by the send_sms action."""

    @abstractmethod
    def send(self, recipients: List[str], text: str) -> None:
        raise NotImplementedError


class MelipayamakSmsTransport(SmsTransport):
    def __init__(self, config: TransportConfig, session: requests.Session | None = None) -> None:
        self.config = config
        self.session = session or requests.Session()

    def _request_kwargs(self, recipient: str, text: str) -> dict:
        config = self.config
        if config.uses_soap:
            form = {
                "username": config.username,
                "password": config.password,
                "to": recipient,
                "from": config.sender_number,
                "text": text,
                "isflash": "true" if config.is_flash else "false",
            }
            if config.body_id:
                form["bodyId"] = config.body_id
            return {
                "data": form,
                "headers": {"Content-Type": "application/x-www-form-urlencoded; charset=UTF-8"},
            }

        payload = {"to": recipient, "from": config.sender_number, "text": text, "isFlash": config.is_flash}
        if config.body_id:
            payload["bodyId"] = config.body_id
        if config.api_key:
            payload["apiKey"] = config.api_key
        else:
            payload["username"] = config.username
            payload["password"] = config.password
        return {"json": payload}

    def send(self, recipients: List[str], text: str) -> None:
        self.config.require_complete()
        targets = unique_recipients(recipients)
        if not targets:
            raise SmsTransportError("گیرنده پیامک مشخص نشده است.")

        url = self.config.endpoint
        for recipient in targets:
            try:
                response = self.session.post(url, timeout=self.config.timeout, **self._request_kwargs(recipient, text))
            except requests.RequestException as exc:
                raise SmsTransportError(f"SMS request failed: {exc}") from exc
            if response.status_code // 100 != 2:
                body = response.text
                raise SmsTransportError(body or f"HTTP {response.status_code}", response.status_code, body)
            logger.info("SMS sent to=%s mode=%s", recipient, "soap" if self.config.uses_soap else "rest")


@dataclass
class SentSms:
    recipients: List[str]
    text: str


class InMemorySmsTransport(SmsTransport):
    """
    Records messages instead of delivering them. For local runs and tests.
    """

    def __init__(self) -> None:
        self.sent: List[SentSms] = []

    def send(self, recipients: List[str], text: str) -> None:
        self.sent.append(SentSms(recipients=list(recipients), text=text))
