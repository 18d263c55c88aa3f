from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Tuple


@dataclass(frozen=True)
class LocaleInfo:
    decimal_sep: str
    thousands_sep: str
    symbol_first_space: bool
    months: Tuple[str, ...]
    day_month: str
    month_year: str
    short_date: str
    messages: Dict[str, str] = field(default_factory=dict)
    symbols: Dict[str, str] = field(default_factory=dict)


_LOCALES: Dict[str, LocaleInfo] = {
    "pt_BR": LocaleInfo(
        decimal_sep=",",
        thousands_sep=".",
        symbol_first_space=True,
        months=(
            "janeiro", "fevereiro", "março", "abril", "maio", "junho",
            "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
        ),
        day_month="{day} de {month}",
        month_year="{month}, {year}",
        short_date="%d/%m/%y",
        messages={
            "entries": "Entradas",
            "expenses": "Saídas",
            "total": "Total",
            "last_entry": "última entrada dia {date}",
            "last_expense": "última saída dia {date}",
            "interval": "01 a {date}",
            "no_transactions": "Não há transações",
        },
        symbols={"BRL": "R$", "USD": "US$", "EUR": "€"},
    ),
    "en_US": LocaleInfo(
        decimal_sep=".",
        thousands_sep=",",
        symbol_first_space=False,
        months=(
            "January", "February", "March", "April", "May", "June",
            "July", "August", "September", "October", "November", "December",
        ),
        day_month="{month} {day}",
        month_year="{month}, {year}",
        short_date="%m/%d/%y",
        messages={
            "entries": "Income",
            "expenses": "Outcome",
            "total": "Total",
            "last_entry": "last entry on {date}",
            "last_expense": "last outcome on {date}",
            "interval": "01 to {date}",
            "no_transactions": "No transactions",
        },
        symbols={"BRL": "R$", "USD": "$", "EUR": "€"},
    ),
}

_CENTS = Decimal("0.01")


def get_locale(name: str) -> LocaleInfo:
    try:
        return _LOCALES[name]
    except KeyError:
        raise ValueError(
            f"Unsupported locale '{name}'. Choose one of: {', '.join(sorted(_LOCALES))}"
        )


def message(locale: str, key: str, **kwargs) -> str:
    return get_locale(locale).messages[key].format(**kwargs)


def format_currency(amount: Decimal, currency: str = "BRL", locale: str = "pt_BR") -> str:
    """
    Format an amount as localized currency, e.g. 'R$ 1.234,56' for pt_BR/BRL
    or '$1,234.56' for en_US/USD. Unknown currencies fall back to the ISO code.
    """
    info = get_locale(locale)
    value = Decimal(amount).quantize(_CENTS, rounding=ROUND_HALF_UP)
    number = f"{abs(value):,.2f}"
    number = number.replace(",", "\0").replace(".", info.decimal_sep).replace("\0", info.thousands_sep)

    symbol = info.symbols.get(currency, currency)
    if info.symbol_first_space or symbol == currency:
        text = f"{symbol} {number}"
    else:
        text = f"{symbol}{number}"
    return f"-{text}" if value < 0 else text


def format_day_month(moment: date | datetime, locale: str = "pt_BR") -> str:
    info = get_locale(locale)
    return info.day_month.format(day=moment.day, month=info.months[moment.month - 1])


def format_month_year(year: int, month: int, locale: str = "pt_BR") -> str:
    info = get_locale(locale)
    return info.month_year.format(month=info.months[month - 1], year=year)


def format_short_date(moment: date | datetime, locale: str = "pt_BR") -> str:
    return moment.strftime(get_locale(locale).short_date)
