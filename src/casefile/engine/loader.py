"""Parse quest records into an immutable Catalog.

Records come from the packaged quests.json (or any list of dicts with the
same shape). Every problem is reported here, at load time, so the dialog
layer never sees a quest it cannot validate.
"""

import json
from collections.abc import Iterable
from pathlib import Path
from types import MappingProxyType
from typing import Any

from ..logging import get_logger
from .catalog import (
    Catalog,
    ChoiceQuest,
    FreeTextQuest,
    Position,
    Quest,
    QuestCategory,
    Rewards,
)
from .errors import CatalogLoadError, CatalogValidationError

logger = get_logger(__name__)

REQUIRED_FIELDS = (
    "id",
    "title",
    "description",
    "puzzle_prompt",
    "correct_answer",
    "rewards",
    "location",
    "type",
)


def _require_text(record: dict[str, Any], key: str, quest_id: str) -> str:
    value = record[key]
    if not isinstance(value, str) or not value:
        raise CatalogValidationError(
            f"quest {quest_id!r}: {key!r} must be a non-empty string"
        )
    return value


def _parse_rewards(raw: Any, quest_id: str) -> Rewards:
    if not isinstance(raw, dict):
        raise CatalogValidationError(f"quest {quest_id!r}: 'rewards' must be an object")
    amounts = {}
    for key in ("xp", "currency"):
        value = raw.get(key)
        # bool is an int subclass; reject it explicitly
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise CatalogValidationError(
                f"quest {quest_id!r}: reward {key!r} must be a non-negative integer"
            )
        amounts[key] = value
    return Rewards(xp=amounts["xp"], currency=amounts["currency"])


def _parse_location(raw: Any, quest_id: str) -> Position:
    if not isinstance(raw, dict):
        raise CatalogValidationError(f"quest {quest_id!r}: 'location' must be an object")
    coords = []
    for key in ("x", "y"):
        value = raw.get(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise CatalogValidationError(
                f"quest {quest_id!r}: location {key!r} must be a number"
            )
        coords.append(float(value))
    return Position(*coords)


def _parse_category(raw: Any, quest_id: str) -> QuestCategory:
    try:
        return QuestCategory(raw)
    except ValueError:
        raise CatalogValidationError(
            f"quest {quest_id!r}: unknown type {raw!r}"
        ) from None


def _parse_options(raw: Any, answer: str, quest_id: str) -> tuple[str, ...]:
    if not isinstance(raw, list) or not raw:
        raise CatalogValidationError(
            f"quest {quest_id!r}: 'options' must be a non-empty list"
        )
    if not all(isinstance(option, str) and option for option in raw):
        raise CatalogValidationError(
            f"quest {quest_id!r}: every option must be a non-empty string"
        )
    if answer.lower() not in {option.lower() for option in raw}:
        raise CatalogValidationError(
            f"quest {quest_id!r}: correct answer {answer!r} is not among the options"
        )
    return tuple(raw)


def parse_quest(record: Any) -> Quest:
    """Turn one raw record into a ChoiceQuest or FreeTextQuest."""
    if not isinstance(record, dict):
        raise CatalogValidationError(f"quest record must be an object, got {record!r}")

    quest_id = record.get("id", "<unknown>")
    for key in REQUIRED_FIELDS:
        if key not in record:
            raise CatalogValidationError(f"quest {quest_id!r}: missing field {key!r}")

    quest_id = _require_text(record, "id", quest_id)
    answer = _require_text(record, "correct_answer", quest_id)
    fields = dict(
        id=quest_id,
        title=_require_text(record, "title", quest_id),
        description=_require_text(record, "description", quest_id),
        puzzle_prompt=_require_text(record, "puzzle_prompt", quest_id),
        correct_answer=answer,
        rewards=_parse_rewards(record["rewards"], quest_id),
        location=_parse_location(record["location"], quest_id),
        category=_parse_category(record["type"], quest_id),
    )

    match record.get("options"):
        case None:
            return FreeTextQuest(**fields)
        case options:
            return ChoiceQuest(**fields, options=_parse_options(options, answer, quest_id))


def build_catalog(records: Iterable[Any]) -> Catalog:
    """Validate records and index them by id."""
    quests: dict[str, Quest] = {}
    for record in records:
        quest = parse_quest(record)
        if quest.id in quests:
            raise CatalogValidationError(f"duplicate quest id {quest.id!r}")
        quests[quest.id] = quest
    return Catalog(quests=MappingProxyType(quests))


def load_catalog(data_path: Path) -> Catalog:
    """Read quests.json and return a populated Catalog."""
    try:
        with open(data_path, encoding="utf-8") as fh:
            records = json.load(fh)
    except OSError as exc:
        raise CatalogLoadError(f"cannot read quest catalog {data_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise CatalogLoadError(f"invalid JSON in {data_path}: {exc}") from exc

    if not isinstance(records, list):
        raise CatalogLoadError(f"{data_path} must contain a list of quests")

    catalog = build_catalog(records)
    logger.debug("catalog_parsed", path=str(data_path), quests=len(catalog))
    return catalog
