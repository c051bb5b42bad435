# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path

from .schemas import FeaturizerOptions, TrainConfig

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}
LABEL_FORMATS = ("auto", "truefalse", "binary")


def get_env(name: str, default: str | None = None) -> str | None:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def get_int_env(name: str, default: int) -> int:
    raw = get_env(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def get_float_env(name: str, default: float) -> float:
    raw = get_env(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def get_bool_env(name: str, default: bool) -> bool:
    raw = get_env(name)
    if raw is None:
        return default
    lowered = raw.lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    return default


@dataclass(slots=True)
class Settings:
    data_path: Path = Path("data/sentiment_train.tsv")
    model_path: str = "model/sentiment_model.joblib"
    label_format: str = "auto"
    positive_name: str = "positive"
    negative_name: str = "negative"
    color: bool = True
    train: TrainConfig = field(default_factory=TrainConfig)

    def with_overrides(
        self,
        *,
        data_path: str | None = None,
        model_path: str | None = None,
        seed: int | None = None,
        test_fraction: float | None = None,
        label_format: str | None = None,
        color: bool | None = None,
    ) -> "Settings":
        train = self.train
        if seed is not None:
            train = replace(train, seed=seed)
        if test_fraction is not None:
            train = replace(train, test_fraction=test_fraction)
        return replace(
            self,
            data_path=Path(data_path) if data_path is not None else self.data_path,
            model_path=model_path if model_path is not None else self.model_path,
            label_format=label_format or self.label_format,
            color=self.color if color is None else color,
            train=train,
        )


def load_settings() -> Settings:
    """Build settings from ``ML_*`` environment variables."""
    label_format = (get_env("ML_LABEL_FORMAT", "auto") or "auto").lower()
    if label_format not in LABEL_FORMATS:
        label_format = "auto"

    test_fraction = get_float_env("ML_TEST_FRACTION", 0.1)
    if not 0.0 < test_fraction < 1.0:
        test_fraction = 0.1

    featurizer = FeaturizerOptions(
        char_ngram_length=max(get_int_env("ML_CHAR_NGRAM", 3), 1),
        word_ngram_length=max(get_int_env("ML_WORD_NGRAM", 0), 0),
        remove_stop_words=get_bool_env("ML_REMOVE_STOP_WORDS", False),
    )
    train = TrainConfig(
        seed=get_int_env("ML_SEED", 1),
        test_fraction=test_fraction,
        regularization=max(get_float_env("ML_REGULARIZATION", 1.0), 1e-6),
        max_iter=max(get_int_env("ML_MAX_ITER", 1000), 1),
        featurizer=featurizer,
    )
    return Settings(
        data_path=Path(get_env("ML_DATA_PATH", "data/sentiment_train.tsv") or "data/sentiment_train.tsv"),
        model_path=get_env("ML_MODEL_PATH", "model/sentiment_model.joblib") or "model/sentiment_model.joblib",
        label_format=label_format,
        positive_name=get_env("ML_POSITIVE_NAME", "positive") or "positive",
        negative_name=get_env("ML_NEGATIVE_NAME", "negative") or "negative",
        color=get_bool_env("ML_COLOR", True),
        train=train,
    )
