# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class Record:
    text: str
    label: bool | None = None


@dataclass(frozen=True, slots=True)
class FeaturizerOptions:
    case_mode: str = "lower"
    keep_diacritics: bool = True
    keep_numbers: bool = True
    keep_punctuations: bool = True
    char_ngram_length: int = 3
    word_ngram_length: int = 0
    remove_stop_words: bool = False


@dataclass(frozen=True, slots=True)
class TrainConfig:
    seed: int = 1
    test_fraction: float = 0.1
    regularization: float = 1.0
    max_iter: int = 1000
    featurizer: FeaturizerOptions = field(default_factory=FeaturizerOptions)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "TrainConfig":
        values = dict(payload)
        values["featurizer"] = FeaturizerOptions(**dict(values.get("featurizer") or {}))
        return cls(**values)


INPUT_COLUMNS = (("text", "string"), ("label", "boolean"))
OUTPUT_COLUMNS = (
    ("features", "vector<float>"),
    ("tokens", "vector<string>"),
    ("score", "float"),
    ("probability", "float"),
    ("predicted_label", "boolean"),
)


@dataclass(frozen=True, slots=True)
class ModelSchema:
    feature_count: int
    classifier: str
    featurizer: dict[str, Any]
    input_columns: tuple[tuple[str, str], ...] = INPUT_COLUMNS
    output_columns: tuple[tuple[str, str], ...] = OUTPUT_COLUMNS

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["input_columns"] = [list(item) for item in self.input_columns]
        payload["output_columns"] = [list(item) for item in self.output_columns]
        return payload

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "ModelSchema":
        return cls(
            feature_count=int(payload["feature_count"]),
            classifier=str(payload["classifier"]),
            featurizer=dict(payload.get("featurizer") or {}),
            input_columns=tuple(tuple(item) for item in payload.get("input_columns", ())) or INPUT_COLUMNS,
            output_columns=tuple(tuple(item) for item in payload.get("output_columns", ())) or OUTPUT_COLUMNS,
        )


@dataclass(slots=True)
class PredictionResult:
    label: bool
    probability: float
    tokens: list[str] = field(default_factory=list)
    feature_count: int = 0
    score: float = 0.0


@dataclass(slots=True)
class TrainingReport:
    metrics: dict[str, float]
    train_rows: int
    test_rows: int
    model_path: str
    metrics_path: str
