"""Entity extraction from free text.

Every extractor walks an ordered list of patterns and returns the first
capture; later patterns are only consulted when earlier ones miss.
"""

from __future__ import annotations

import re
from typing import Optional, Pattern, Sequence

from tools.basic_tools import local_timestamp

FILE_NAME_PATTERNS: Sequence[Pattern[str]] = (
    re.compile(r"(?:파일|file)\s*[이가를]?\s*([^\s]+)"),
    re.compile(r"([^\s]+\.(?:md|txt|js|ts|json|py))"),
    re.compile(r'"([^"]+)"'),
    re.compile(r"'([^']+)'"),
)

CONTENT_PATTERNS: Sequence[Pattern[str]] = (
    re.compile(r"내용[은이가]?\s*[\"']([^\"']+)[\"']"),
    re.compile(r"[\"']([^\"']+)[\"']\s*(?:로|으로|를|을)"),
    re.compile(r"저장[하해]\s*[\"']([^\"']+)[\"']"),
)

PATH_PATTERNS: Sequence[Pattern[str]] = (
    re.compile(r"(?:폴더|디렉토리|directory)\s*([^\s]+)"),
    re.compile(r"([^\s]+/)"),
    re.compile(r"(src|docs|examples)"),
)

SEARCH_TERM_PATTERNS: Sequence[Pattern[str]] = (
    re.compile(r"찾.*[\"']([^\"']+)[\"']"),
    re.compile(r"검색.*[\"']([^\"']+)[\"']"),
    re.compile(r"(\.[a-zA-Z]+)"),
    re.compile(r"([a-zA-Z0-9_-]+)"),
)

EXPRESSION_RUN = re.compile(r"[0-9+\-*/().\s]+")
OPERATOR = re.compile(r"[+\-*/]")

# Operator words go first so numerals inside them ("마이너스") survive.
KOREAN_MATH_WORDS = (
    ("더하기", "+"),
    ("플러스", "+"),
    ("빼기", "-"),
    ("마이너스", "-"),
    ("곱하기", "*"),
    ("곱", "*"),
    ("나누기", "/"),
    ("나눈", "/"),
    ("영", "0"),
    ("일", "1"),
    ("이", "2"),
    ("삼", "3"),
    ("사", "4"),
    ("오", "5"),
    ("육", "6"),
    ("칠", "7"),
    ("팔", "8"),
    ("구", "9"),
)

DEFAULT_READ_FILE = "README.md"
DEFAULT_WRITE_FILE = "new-file.txt"
DEFAULT_PATH = "."
DEFAULT_SEARCH_TERM = ".ts"
DEFAULT_EXPRESSION = "2 + 2"


def _first_match(text: str, patterns: Sequence[Pattern[str]]) -> Optional[str]:
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return match.group(1)
    return None


def extract_file_name(text: str) -> Optional[str]:
    return _first_match(text, FILE_NAME_PATTERNS)


def default_content() -> str:
    return f"File created by the dispatch agent.\nCreated at: {local_timestamp()}"


def extract_content(text: str) -> str:
    return _first_match(text, CONTENT_PATTERNS) or default_content()


def extract_path(text: str) -> str:
    return _first_match(text, PATH_PATTERNS) or DEFAULT_PATH


def extract_search_term(text: str) -> str:
    return _first_match(text, SEARCH_TERM_PATTERNS) or DEFAULT_SEARCH_TERM


def _digit_runs(text: str) -> list[str]:
    runs = (match.group(0).strip() for match in EXPRESSION_RUN.finditer(text))
    return [run for run in runs if any(ch.isdigit() for ch in run)]


def _operator_run(text: str) -> Optional[str]:
    for run in _digit_runs(text):
        if OPERATOR.search(run):
            return run
    return None


def substitute_korean_math(text: str) -> str:
    for word, symbol in KOREAN_MATH_WORDS:
        if symbol.isdigit():
            # A numeral right after a digit is a particle ("3이"), not a number.
            text = re.sub(rf"(?<![0-9]){word}", f" {symbol} ", text)
        else:
            text = text.replace(word, f" {symbol} ")
    return re.sub(r"\s+", " ", text)


def extract_expression(text: str) -> str:
    """Pull an arithmetic expression out of ``text``.

    Tries the raw text, then the text with Korean numerals and operator words
    substituted, then any bare number, and finally ``2 + 2``.
    """

    expression = _operator_run(text)
    if expression:
        return expression

    substituted = substitute_korean_math(text)
    expression = _operator_run(substituted)
    if expression:
        return re.sub(r"\s+", " ", expression)

    numbers = _digit_runs(text) or _digit_runs(substituted)
    return numbers[0] if numbers else DEFAULT_EXPRESSION
