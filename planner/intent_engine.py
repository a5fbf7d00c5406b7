"""Intent classification for free-text commands.

The classifier is a decision list: rules are tried in order and the first
rule with a matching pattern produces the intent. Confidence values are
fixed per rule, not probabilities.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Pattern, Sequence, Tuple

from . import entities
from .types import Action, Intent

LOGGER = logging.getLogger("dispatch.intent")

UNKNOWN_CONFIDENCE = 0.1

Build = Callable[[str], Tuple[dict, dict]]


@dataclass(frozen=True)
class IntentRule:
    """One row of the decision list."""

    action: Action
    tool: str
    patterns: Tuple[Pattern[str], ...]
    confidence: float
    build: Build

    def matches(self, normalized: str) -> bool:
        return any(pattern.search(normalized) for pattern in self.patterns)


def _compile(*patterns: str) -> Tuple[Pattern[str], ...]:
    return tuple(re.compile(pattern) for pattern in patterns)


def _read_args(text: str) -> Tuple[dict, dict]:
    file_name = entities.extract_file_name(text) or entities.DEFAULT_READ_FILE
    return {"fileName": file_name}, {"path": file_name}


def _write_args(text: str) -> Tuple[dict, dict]:
    file_name = entities.extract_file_name(text) or entities.DEFAULT_WRITE_FILE
    content = entities.extract_content(text)
    return {"fileName": file_name, "content": content}, {"path": file_name, "content": content}


def _list_args(text: str) -> Tuple[dict, dict]:
    path = entities.extract_path(text)
    return {"path": path}, {"path": path}


def _search_args(text: str) -> Tuple[dict, dict]:
    term = entities.extract_search_term(text)
    return {"searchTerm": term}, {"term": term, "path": "."}


def _calculate_args(text: str) -> Tuple[dict, dict]:
    expression = entities.extract_expression(text)
    return {"expression": expression}, {"expression": expression}


def _time_args(text: str) -> Tuple[dict, dict]:
    return {}, {"format": "local"}


def _analysis_args(text: str) -> Tuple[dict, dict]:
    return {}, {"task": "project_analysis"}


DEFAULT_RULES: Tuple[IntentRule, ...] = (
    IntentRule(
        Action.READ_FILE,
        "read_file",
        _compile(r"파일.*읽", r".*내용.*보여", r".*열어", r".*확인.*파일", r"read.*file", r"show.*content"),
        0.9,
        _read_args,
    ),
    IntentRule(
        Action.WRITE_FILE,
        "write_file",
        _compile(r"파일.*만들", r".*저장", r".*생성.*파일", r".*작성", r"create.*file", r"write.*file"),
        0.8,
        _write_args,
    ),
    IntentRule(
        Action.LIST_DIRECTORY,
        "list_directory",
        _compile(r"폴더.*보여", r"디렉토리.*확인", r".*목록", r"뭐.*있", r"list.*dir", r"show.*folder"),
        0.9,
        _list_args,
    ),
    IntentRule(
        Action.SEARCH_FILES,
        "search_files",
        _compile(r"찾.*파일", r"검색", r".*어디.*있", r"find.*file", r"search"),
        0.8,
        _search_args,
    ),
    IntentRule(
        Action.CALCULATE,
        "calculate",
        _compile(r"계산", r"더하", r"빼", r"곱하", r"나누", r"calculate", r"\+|\-|\*|\/|="),
        0.9,
        _calculate_args,
    ),
    IntentRule(
        Action.GET_CURRENT_TIME,
        "get_current_time",
        _compile(r"시간", r"몇시", r"언제", r"time", r"clock"),
        0.9,
        _time_args,
    ),
    IntentRule(
        Action.ANALYZE_PROJECT,
        "complex_task",
        _compile(r"프로젝트.*분석", r"구조.*파악", r"전체.*확인", r"analyze.*project"),
        0.8,
        _analysis_args,
    ),
)


class IntentEngine:
    """Classifies raw text into exactly one ``Intent``."""

    def __init__(self, rules: Sequence[IntentRule] = DEFAULT_RULES) -> None:
        self.rules: List[IntentRule] = list(rules)

    def match_rule(self, text: str) -> IntentRule | None:
        normalized = text.lower().strip()
        if not normalized:
            return None
        for rule in self.rules:
            if rule.matches(normalized):
                return rule
        return None

    def classify(self, text: str) -> Intent:
        rule = self.match_rule(text)
        if rule is None:
            LOGGER.debug("No intent rule matched %r", text)
            return Intent(action=Action.UNKNOWN, confidence=UNKNOWN_CONFIDENCE, tool="unknown")

        # Entities come from the unlowered text so file names keep their case.
        found, args = rule.build(text.strip())
        intent = Intent(
            action=rule.action,
            confidence=rule.confidence,
            tool=rule.tool,
            entities=found,
            args=args,
        )
        LOGGER.debug("Classified %r as %s (%.2f)", text, intent.action.value, intent.confidence)
        return intent
