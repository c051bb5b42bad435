# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

from collections.abc import Iterable

from sklearn.pipeline import Pipeline

from .schemas import ModelSchema, PredictionResult, Record, TrainConfig


class SentimentModel:
    """Fitted featurizer + classifier pipeline. Read-only once built."""

    def __init__(self, *, pipeline: Pipeline, config: TrainConfig) -> None:
        self.pipeline = pipeline
        self.config = config

    @property
    def featurizer(self):
        return self.pipeline.named_steps["featurizer"]

    @property
    def classifier(self):
        return self.pipeline.named_steps["clf"]

    @property
    def feature_count(self) -> int:
        return self.featurizer.feature_count

    @property
    def schema(self) -> ModelSchema:
        return ModelSchema(
            feature_count=self.feature_count,
            classifier=type(self.classifier).__name__,
            featurizer=self.config.to_dict()["featurizer"],
        )

    def predict_proba(self, texts: Iterable[str]) -> list[float]:
        return [float(value) for value in self.pipeline.predict_proba(list(texts))[:, 1]]

    def predict_many(self, texts: Iterable[str]) -> list[PredictionResult]:
        texts = [str(text or "") for text in texts]
        if not texts:
            return []
        probs = self.pipeline.predict_proba(texts)[:, 1]
        scores = self.pipeline.decision_function(texts)
        feature_count = self.feature_count
        return [
            PredictionResult(
                label=bool(prob >= 0.5),
                probability=float(prob),
                tokens=self.featurizer.tokens(text),
                feature_count=feature_count,
                score=float(score),
            )
            for text, prob, score in zip(texts, probs, scores)
        ]

    def predict(self, record: Record) -> PredictionResult:
        return self.predict_many([record.text])[0]
