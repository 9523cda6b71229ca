"""Utility functions for tripledger."""

from tripledger.utils.date_parser import parse_date, parse_statement_date
from tripledger.utils.amount_parser import parse_amount, round_money
from tripledger.utils.tokenizer import tokenize

__all__ = ["parse_date", "parse_statement_date", "parse_amount", "round_money", "tokenize"]
