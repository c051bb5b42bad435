# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

from pathlib import Path

from ..model import SentimentModel
from ..model_store import load_model
from ..schemas import ModelSchema, PredictionResult, Record


class PredictionEngine:
    """Scores one text at a time against a single loaded model."""

    def __init__(self, *, model: SentimentModel, schema: ModelSchema, model_path: Path | None = None) -> None:
        self.model = model
        self.schema = schema
        self.model_path = model_path

    @property
    def feature_count(self) -> int:
        return self.schema.feature_count

    def predict(self, text: str) -> PredictionResult:
        return self.model.predict(Record(text=text, label=None))


def load_predictor(model_path: Path | str) -> PredictionEngine:
    model, schema = load_model(model_path)
    return PredictionEngine(model=model, schema=schema, model_path=Path(model_path))
