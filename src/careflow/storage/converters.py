"""Converters between database rows and model objects."""

from __future__ import annotations

import json
import sqlite3
from typing import TypeVar

from careflow.core.models import CareFlowModel
from careflow.core.utils import normalize_key


M = TypeVar("M", bound=CareFlowModel)


def model_to_document(model: CareFlowModel) -> str:
    """Serialize a record to the JSON document stored in the ``document`` column."""
    return json.dumps(model.to_document(), sort_keys=True)


def row_to_model(row: sqlite3.Row, model_cls: type[M]) -> M:
    """Convert a database row to a model, ignoring unknown document keys."""
    return model_cls.model_validate(json.loads(row["document"] or "{}"))


def specialty_key(specialty: str | None) -> str | None:
    """Indexed form of a specialty tag."""
    return normalize_key(specialty) or None
