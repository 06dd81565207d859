from .phone import is_valid_iran_mobile, normalize_phone, to_english_digits
from .transport import (
    InMemorySmsTransport,
    MelipayamakSmsTransport,
    SentSms,
    SmsConfigurationError,
    SmsTransport,
    SmsTransportError,
    TransportConfig,
)

__all__ = [
    "InMemorySmsTransport",
    "MelipayamakSmsTransport",
    "SentSms",
    "SmsConfigurationError",
    "SmsTransport",
    "SmsTransportError",
    "TransportConfig",
    "is_valid_iran_mobile",
    "normalize_phone",
    "to_english_digits",
]
