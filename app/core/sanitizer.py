import re

_PHONE_CANDIDATE = re.compile(r"(?<![\w.*])\+?\d[\d\s-]{6,20}\d(?![\w.])")


def _redact_phone(match: re.Match) -> str:
    digits = sum(ch.isdigit() for ch in match.group())
    if 10 <= digits <= 15:
        return "[PHONE_REDACTED]"
    return match.group()


def redact_pii(message: str) -> str:
    """Redact personally identifiable information from log messages.

    Form submissions carry names, addresses and phone numbers; only the
    shape of those values is kept in logs.
    """
    if not isinstance(message, str):
        return str(message)

    # Emails: user@example.com -> u***@example.com
    message = re.sub(
        r"[\w.+-]+@[\w.-]+\.\w+",
        lambda m: m.group()[0] + "***@" + m.group().split("@")[1],
        message,
    )

    # IPs (IPv4): 192.168.1.100 -> 192.168.1.***
    message = re.sub(
        r"\b(\d{1,3}\.\d{1,3}\.\d{1,3}\.)\d{1,3}\b", r"\1***", message
    )

    # API Keys: long hex strings (32+ chars)
    message = re.sub(r"\b[a-fA-F0-9]{32,}\b", "[API_KEY_REDACTED]", message)

    # Phone numbers: 10-15 digits, optional +, spaces or dashes between groups
    message = _PHONE_CANDIDATE.sub(_redact_phone, message)

    # Password values in common patterns
    message = re.sub(
        r'(password|passwd|pwd|secret)["\']?\s*[:=]\s*["\']?[^"\'&\s]+',
        r"\1=[REDACTED]",
        message,
        flags=re.IGNORECASE,
    )

    return message
