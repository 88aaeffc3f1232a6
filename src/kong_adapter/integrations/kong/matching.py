"""Structural subset matching of desired objects against Kong objects.

``match_objects`` checks that everything the desired object specifies is
present and equal in the observed object. Fields Kong adds on its own
(ids, timestamps, defaults) are ignored, so a freshly fetched entity matches
the configuration it was created from.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any

import structlog
from pydantic import BaseModel

from kong_adapter.integrations.kong.statistics import (
    StatisticsRecorder,
    get_statistics_recorder,
)

logger = structlog.get_logger()


class ValueKind(Enum):
    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    OTHER = "other"


def value_kind(value: Any) -> ValueKind:
    """Classify a value; bool is checked before number since bool is an int."""
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        return ValueKind.SEQUENCE
    return ValueKind.OTHER


def _as_data(value: Any, *, desired: bool) -> Any:
    # Unset fields of a desired model mean "don't care"
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", exclude_none=desired)
    return value


def _contains(desired: Any, observed: Any) -> bool:
    kind = value_kind(desired)
    if kind != value_kind(observed):
        return False

    if kind is ValueKind.MAPPING:
        for key, desired_value in desired.items():
            if key not in observed:
                return False
            if not _contains(desired_value, observed[key]):
                return False
        return True

    if kind is ValueKind.SEQUENCE:
        if len(desired) > len(observed):
            return False
        return all(_contains(d, o) for d, o in zip(desired, observed, strict=False))

    return bool(desired == observed)


def match_objects(
    desired: Any,
    observed: Any,
    *,
    statistics: StatisticsRecorder | None = None,
) -> bool:
    """Check whether ``desired`` is contained in ``observed``.

    Args:
        desired: Object built from the wanted configuration.
        observed: Object as currently held by Kong.
        statistics: Recorder for failed comparisons; defaults to the
            process-wide one. The pair is only stored while changing
            actions are being kept.

    Returns:
        True if every property of ``desired`` exists in ``observed`` with
        the same kind of value and an equal value, at any depth.
    """
    api_object = _as_data(desired, desired=True)
    kong_object = _as_data(observed, desired=False)

    if _contains(api_object, kong_object):
        return True

    logger.debug(
        "objects_do_not_match",
        api_object=json.dumps(api_object, default=str, sort_keys=True),
        kong_object=json.dumps(kong_object, default=str, sort_keys=True),
    )
    recorder = statistics if statistics is not None else get_statistics_recorder()
    recorder.record_mismatch(api_object, kong_object)
    return False
