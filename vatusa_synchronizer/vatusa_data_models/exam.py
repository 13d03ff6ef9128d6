from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from .utils import parse_bool, parse_datetime, parse_int, require
from ..exceptions import MalformedResponseError


@dataclass
class ExamQuestion(object):
    question: str
    correct: str
    selected: str
    is_correct: bool

    @classmethod
    def from_json(cls, json_obj: dict) -> 'ExamQuestion':
        return cls(
            question=require(json_obj, 'question'),
            correct=require(json_obj, 'correct'),
            selected=require(json_obj, 'selected'),
            is_correct=parse_bool(require(json_obj, 'is_correct'),
                                  'is_correct')
        )


@dataclass
class ExamResult(object):

    """
    A completed exam.

    `questions` is `None` when VATUSA has no per-question data for the
    result, which is the case for every exam taken on the old site and
    for the summaries returned by `/exam/results`.
    """

    id: int
    name: str
    score: int
    passed: bool
    date: datetime
    cid: Optional[int] = None
    questions: Optional[List[ExamQuestion]] = field(default=None)

    @classmethod
    def from_json(cls, json_obj: dict) -> 'ExamResult':
        if not isinstance(json_obj, dict):
            raise MalformedResponseError('exam result is not an object',
                                         json_obj)
        cid = json_obj.get('cid')
        questions = json_obj.get('questions')
        if questions is not None:
            if not isinstance(questions, list):
                raise MalformedResponseError('field "questions" is not a '
                                             'list', json_obj)
            questions = [ExamQuestion.from_json(q) for q in questions]

        return cls(
            id=parse_int(require(json_obj, 'id'), 'id'),
            name=require(json_obj, 'name'),
            score=parse_int(require(json_obj, 'score'), 'score'),
            # true/false in /exam/results but 0 or 1 in /exam/result
            passed=parse_bool(require(json_obj, 'passed'), 'passed'),
            date=parse_datetime(require(json_obj, 'date'), 'date'),
            cid=parse_int(cid, 'cid') if cid is not None else None,
            questions=questions
        )
