from decimal import Decimal, ROUND_HALF_EVEN, localcontext


def to_base_units(amount: str | Decimal, decimals: int) -> int:
    with localcontext() as ctx:
        ctx.prec = 100
        scaled = Decimal(f"{amount}").scaleb(int(decimals))
        return int(scaled.to_integral_value(rounding=ROUND_HALF_EVEN))


def format_amount(value: int, decimals: int) -> str:
    if value == 0:
        return "0"

    with localcontext() as ctx:
        ctx.prec = 100
        amount = Decimal(value).scaleb(-int(decimals))

    text = f"{amount:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
