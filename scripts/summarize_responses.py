"""scripts/summarize_responses.py

Summarise one respondent's answers for a survey module from a JSON export.

Input file
----------
    {
      "questions": [{"id": "q1", "text": "...", "section": "...", "scale": "1-5"}, ...],
      "answers":   {"q1": "4", "q2": "3", ...}
    }

``answers`` may also be a list of ``{"questionId": ..., "answer": ...}``
objects; the last answer for a question wins.

Steps
-----
1. Validate questions / answers    → Question, Answer models
2. Summarise                       → ResponseAggregator.summarize
3. Optional grouped breakdown      → ResponseAggregator.group_by
4. Optional score distributions    → DistributionBuilder per scale

Usage
-----
    python scripts/summarize_responses.py export.json --dimension driver --distribution
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import structlog

# ── app imports ───────────────────────────────────────────────────────────────
from survey_analytics.models import Answer, DistributionOrder, GroupingDimension, Question, ScaleType
from survey_analytics.scoring.aggregator import ResponseAggregator, answers_to_mapping
from survey_analytics.scoring.distribution import DistributionBuilder

# ── logging ──────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s %(name)s %(message)s",
    stream=sys.stderr,
)
structlog.configure(
    processors=[
        structlog.stdlib.add_log_level,
        structlog.dev.ConsoleRenderer(),
    ],
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=False,
)
log = structlog.get_logger("summarize_responses")


def load_export(path: Path) -> tuple[list[Question], dict[str, str]]:
    """Parse the export file into questions and a ``question_id -> value`` mapping.

    Raises:
        ValueError: If the file is not JSON or does not have the export shape.
    """
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError("export must be a JSON object")
    raw_questions = payload.get("questions", [])
    if not isinstance(raw_questions, list):
        raise ValueError("\"questions\" must be a list")
    questions = [Question.model_validate(q) for q in raw_questions]
    raw_answers = payload.get("answers", {})
    if isinstance(raw_answers, list):
        answers = answers_to_mapping(Answer.model_validate(a) for a in raw_answers)
    elif not isinstance(raw_answers, dict):
        raise ValueError("\"answers\" must be an object or a list")
    else:
        answers = {str(k): str(v) for k, v in raw_answers.items() if v is not None}
    return questions, answers


def build_report(
    questions: list[Question],
    answers: dict[str, str],
    dimension: Optional[GroupingDimension] = None,
    distribution: bool = False,
    order: DistributionOrder = DistributionOrder.INSERTION,
) -> dict[str, Any]:
    """Assemble the JSON report printed by the CLI."""
    aggregator = ResponseAggregator()
    result = aggregator.aggregate(questions, answers, dimension)
    report: dict[str, Any] = {
        "summary": {
            "total_responses": result.summary.total_responses,
            "positive_responses": result.summary.positive_responses,
            "positive_percentage": result.summary.positive_percentage,
        },
        "sections": {
            name: [q.id for q in section_questions]
            for name, section_questions in result.summary.grouped_by_section.items()
        },
    }
    if result.groups is not None:
        report["groups"] = [g.model_dump() for g in result.groups]

    if distribution:
        builder = DistributionBuilder(order=order)
        values_by_scale: dict[ScaleType, list[str]] = {}
        for q in questions:
            if q.id in answers:
                values_by_scale.setdefault(q.scale, []).append(answers[q.id])
        report["distribution"] = {
            scale.value: [b.model_dump() for b in builder.build(values, scale)]
            for scale, values in values_by_scale.items()
        }
    return report


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Summarise survey responses from a JSON export.")
    parser.add_argument("path", type=Path, help="JSON file with questions and answers")
    parser.add_argument(
        "--dimension",
        choices=[d.value for d in GroupingDimension],
        help="Group results by section, category or driver",
    )
    parser.add_argument("--distribution", action="store_true", help="Include score distributions")
    parser.add_argument(
        "--order",
        choices=[o.value for o in DistributionOrder],
        default=DistributionOrder.INSERTION.value,
        help="Distribution bucket ordering",
    )
    args = parser.parse_args(argv)

    try:
        questions, answers = load_export(args.path)
    except (OSError, ValueError) as e:  # JSONDecodeError and ValidationError are ValueErrors
        log.error("export_load_failed", path=str(args.path), error=str(e))
        return 1

    log.info("export_loaded", questions=len(questions), answers=len(answers))
    report = build_report(
        questions,
        answers,
        dimension=GroupingDimension(args.dimension) if args.dimension else None,
        distribution=args.distribution,
        order=DistributionOrder(args.order),
    )
    print(json.dumps(report, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
