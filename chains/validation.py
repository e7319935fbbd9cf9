import re
from decimal import Decimal, InvalidOperation


VALIDATION = {
    "name": re.compile(r"^[a-zA-Z][a-zA-Z0-9]*$"),
    # '$' followed by letters, shared by dispatch and provisioning
    "token": re.compile(r"^\$[a-zA-Z]+$"),
    # a number greater than 0 with at most 18 fractional digits
    "number": re.compile(r"^(0(\.0*[1-9]\d{0,17})?|[1-9]\d*(\.\d{1,18})?)$"),
    "address": re.compile(r"^0x[a-fA-F0-9]{40}$"),
    "url": re.compile(r"^https?://[\da-zA-Z.-]+\.[a-zA-Z]{2,}(:\d+)?(/[\w.~%/-]*)?$"),
}

MAX_DECIMALS = 18


def is_valid_address(value) -> bool:
    return isinstance(value, str) and bool(VALIDATION["address"].fullmatch(value))


def is_valid_token(value) -> bool:
    return isinstance(value, str) and bool(VALIDATION["token"].fullmatch(value))


def is_valid_name(value) -> bool:
    return isinstance(value, str) and bool(VALIDATION["name"].fullmatch(value))


def is_valid_url(value) -> bool:
    return isinstance(value, str) and bool(VALIDATION["url"].fullmatch(value))


def is_positive_number(value) -> bool:
    text = f"{value}"
    if not VALIDATION["number"].fullmatch(text):
        return False

    try:
        amount = Decimal(text)
    except InvalidOperation:
        return False

    return amount > 0 and amount.as_tuple().exponent >= -MAX_DECIMALS


def is_valid_decimals(value) -> bool:
    text = f"{value}"
    return text.isdigit() and is_positive_number(text) and int(text) <= MAX_DECIMALS


def normalize_symbol(token: str) -> str:
    return f"${token.strip().strip('$').lower()}"
