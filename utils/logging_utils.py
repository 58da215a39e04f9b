"""Masking for values that end up in log lines."""


def mask_value(value: str) -> str:
    """
    Mask an email address, token or phone number before logging it.

    ``asha@example.com`` becomes ``as***@example.com``; other strings longer
    than 12 characters keep their first and last four characters; shorter
    ones are fully masked. Non-strings are returned unchanged.
    """
    if not isinstance(value, str):
        return value
    if "@" in value:
        name, _, domain = value.partition("@")
        return (name[:2] + "***@" + domain) if name else "***@" + domain
    if len(value) > 12:
        return value[:4] + "..." + value[-4:]
    return "***"
