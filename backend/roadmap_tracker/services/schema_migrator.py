"""
Schema migration of the stored document.

Raw JSON read from either backend is matched against an ordered list of
shape rules. The first matching rule converts it to ``AllRoadmapsData``;
input that matches none becomes the empty document.

Items are validated one by one: an invalid roadmap, task or Pomodoro
session is skipped and an invalid active Pomodoro task becomes null, so
one bad entry never discards the rest of the document. A result that lost
items is never written back automatically.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, NamedTuple, Optional, TypeVar
from uuid import uuid4

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from roadmap_tracker.core.config import get_settings
from roadmap_tracker.core.logger import setup_logger
from roadmap_tracker.models.document import AllRoadmapsData
from roadmap_tracker.models.pomodoro import ActivePomodoroTaskDetails, PomodoroSession
from roadmap_tracker.models.roadmap import Roadmap
from roadmap_tracker.models.task import Task

logger = setup_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# Converted document and the number of items that had to be dropped.
Converted = tuple[AllRoadmapsData, int]


class ShapeRule(NamedTuple):
    name: str
    matches: Callable[[Mapping[str, Any]], bool]
    convert: Callable[[Mapping[str, Any]], Converted]


class MigrationResult(NamedTuple):
    """
    Outcome of normalizing stored data.

    ``rewrite`` is True when the stored copy should be replaced by the
    document: it is in an older shape and nothing was lost converting it.
    """

    document: AllRoadmapsData
    dropped: int = 0
    rewrite: bool = False


def _validate_items(model: type[ModelT], items: Any, label: str) -> tuple[list[ModelT], int]:
    if items is None:
        return [], 0
    if not isinstance(items, list):
        logger.warning("Ignoring %s list of type %s.", label, type(items).__name__)
        return [], 1

    valid: list[ModelT] = []
    dropped = 0
    for index, item in enumerate(items):
        try:
            valid.append(model.model_validate(item))
        except PydanticValidationError as e:
            logger.warning("Skipping invalid %s at index %d: %s", label, index, e)
            dropped += 1
    return valid, dropped


def _convert_roadmap(raw: Any) -> tuple[Optional[Roadmap], int]:
    if not isinstance(raw, Mapping):
        logger.warning("Skipping roadmap entry of type %s.", type(raw).__name__)
        return None, 1

    tasks, dropped = _validate_items(Task, raw.get("tasks"), "task")
    try:
        roadmap = Roadmap.model_validate({**raw, "tasks": []})
    except PydanticValidationError as e:
        logger.warning("Skipping invalid roadmap: %s", e)
        return None, dropped + 1
    roadmap.tasks = tasks
    return roadmap, dropped


def _convert_roadmaps(items: list[Any]) -> tuple[list[Roadmap], int]:
    roadmaps = []
    dropped = 0
    for item in items:
        roadmap, lost = _convert_roadmap(item)
        dropped += lost
        if roadmap is not None:
            roadmaps.append(roadmap)
    return roadmaps, dropped


def _convert_active_task(raw: Any) -> tuple[Optional[ActivePomodoroTaskDetails], int]:
    if not raw:
        return None, 0
    try:
        return ActivePomodoroTaskDetails.model_validate(raw), 0
    except PydanticValidationError as e:
        logger.warning("Clearing invalid active Pomodoro task: %s", e)
        return None, 1


def _build_document(roadmaps: list[Roadmap], raw: Mapping[str, Any], dropped: int) -> Converted:
    """Attach the optional Pomodoro parts; missing ones default to ``[]``/``null``."""
    sessions, lost_sessions = _validate_items(
        PomodoroSession, raw.get("pomodoroSessions"), "Pomodoro session"
    )
    active, lost_active = _convert_active_task(raw.get("activePomodoroTaskDetails"))
    document = AllRoadmapsData(
        roadmaps=roadmaps,
        pomodoro_sessions=sessions,
        active_pomodoro_task_details=active,
    )
    return document, dropped + lost_sessions + lost_active


def _is_current_schema(raw: Mapping[str, Any]) -> bool:
    return isinstance(raw.get("roadmaps"), list)


def _from_current_schema(raw: Mapping[str, Any]) -> Converted:
    roadmaps, dropped = _convert_roadmaps(raw["roadmaps"])
    return _build_document(roadmaps, raw, dropped)


def _is_legacy_schema(raw: Mapping[str, Any]) -> bool:
    return isinstance(raw.get("tasks"), list) and bool(raw.get("timeScale")) and not raw.get("roadmaps")


def _from_legacy_schema(raw: Mapping[str, Any]) -> Converted:
    logger.info("Migrating old single-roadmap data format...")
    roadmaps, dropped = _convert_roadmaps([
        {
            "id": str(uuid4()),
            "name": get_settings().DEFAULT_ROADMAP_NAME,
            "tasks": raw["tasks"],
            "timeScale": raw["timeScale"],
        }
    ])
    return _build_document(roadmaps, raw, dropped)


SHAPE_RULES: tuple[ShapeRule, ...] = (
    ShapeRule("current", _is_current_schema, _from_current_schema),
    ShapeRule("legacy", _is_legacy_schema, _from_legacy_schema),
)


def migrate(raw: Optional[Any]) -> MigrationResult:
    """
    Convert any stored shape into the current document.

    Args:
        raw: Parsed JSON (or an already normalized document), None if absent

    Returns:
        The document, how many invalid items were dropped, and whether the
        stored copy should be rewritten in the current shape
    """
    if isinstance(raw, AllRoadmapsData):
        raw = raw.to_json_dict()
    if raw is None:
        return MigrationResult(AllRoadmapsData.empty())
    if not isinstance(raw, Mapping):
        logger.warning("Invalid data structure (%s), using empty data.", type(raw).__name__)
        return MigrationResult(AllRoadmapsData.empty(), dropped=1)

    for rule in SHAPE_RULES:
        if not rule.matches(raw):
            continue
        document, dropped = rule.convert(raw)
        if dropped:
            logger.warning("Dropped %d invalid item(s) from %s schema data.", dropped, rule.name)
        rewrite = dropped == 0 and not is_current_schema(raw, document)
        return MigrationResult(document, dropped, rewrite)

    logger.warning("Unrecognized data structure, using empty data.")
    return MigrationResult(AllRoadmapsData.empty(), dropped=1)


def normalize(raw: Optional[Any]) -> AllRoadmapsData:
    """
    The current document for any stored shape.

    Normalizing the result again yields an equal document.
    """
    return migrate(raw).document


def is_current_schema(raw: Optional[Any], document: Optional[AllRoadmapsData] = None) -> bool:
    """True if the stored value is exactly the JSON of its normalized document."""
    if document is None:
        document = normalize(raw)
    return raw == document.to_json_dict()
