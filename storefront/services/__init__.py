# Services Module
from .money import to_decimal, parse_price, round_money, format_money, line_total

__all__ = ["to_decimal", "parse_price", "round_money", "format_money", "line_total"]
