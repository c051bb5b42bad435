# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
"""Single-file persistence for fitted sentiment models.

The artifact is a joblib dump of an envelope dict::

    {
        "format": "sentimentai-model",
        "format_version": 1,
        "created_at_utc": "...",
        "model_version": "20260101_120000",
        "config": {...},      # TrainConfig.to_dict()
        "schema": {...},      # ModelSchema.to_dict()
        "pipeline": <sklearn Pipeline>,
    }

Writes go to a temporary file next to the destination and are moved into
place with ``os.replace``, so a failed save never leaves a partial artifact.
"""
from __future__ import annotations

import json
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import joblib
from sklearn.pipeline import Pipeline

from .errors import ModelLoadError, ModelSaveError
from .features import TextFeaturizer
from .model import SentimentModel
from .schemas import ModelSchema, TrainConfig

ARTIFACT_FORMAT = "sentimentai-model"
FORMAT_VERSION = 1


def _timestamp_key() -> str:
    return datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")


def _iso_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


def _atomic_write(path: Path, writer) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    os.close(fd)
    try:
        writer(Path(tmp_name))
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def save_model(model: SentimentModel, schema: ModelSchema, path: Path | str) -> Path:
    path = Path(path)
    envelope = {
        "format": ARTIFACT_FORMAT,
        "format_version": FORMAT_VERSION,
        "created_at_utc": _iso_now(),
        "model_version": _timestamp_key(),
        "config": model.config.to_dict(),
        "schema": schema.to_dict(),
        "pipeline": model.pipeline,
    }
    try:
        _atomic_write(path, lambda target: joblib.dump(envelope, target))
    except OSError as exc:
        raise ModelSaveError(path, exc.strerror or str(exc)) from exc
    return path


def write_metrics(metrics: dict[str, float], path: Path | str) -> Path:
    path = Path(path)
    text = json.dumps(metrics, ensure_ascii=False, indent=2, sort_keys=True) + "\n"
    try:
        _atomic_write(path, lambda target: target.write_text(text, encoding="utf-8"))
    except OSError as exc:
        raise ModelSaveError(path, exc.strerror or str(exc)) from exc
    return path


def metrics_path_for(model_path: Path | str) -> Path:
    model_path = Path(model_path)
    return model_path.with_name(f"{model_path.stem}.metrics.json")


def _read_envelope(path: Path) -> dict[str, Any]:
    try:
        payload = joblib.load(path)
    except Exception as exc:  # joblib/pickle raise many unrelated types on corrupt input
        raise ModelLoadError(path, f"unreadable artifact ({type(exc).__name__}: {exc})") from exc
    if not isinstance(payload, dict) or payload.get("format") != ARTIFACT_FORMAT:
        raise ModelLoadError(path, "not a sentiment model artifact")
    version = payload.get("format_version")
    if version != FORMAT_VERSION:
        raise ModelLoadError(path, f"unsupported format version {version!r} (expected {FORMAT_VERSION})")
    return payload


def load_model(path: Path | str) -> tuple[SentimentModel, ModelSchema]:
    if not str(path).strip():
        raise ModelLoadError("", "no model path given")
    path = Path(path)
    if not path.is_file():
        raise ModelLoadError(path, "file not found")

    payload = _read_envelope(path)
    pipeline = payload.get("pipeline")
    if not isinstance(pipeline, Pipeline):
        raise ModelLoadError(path, "artifact has no fitted pipeline")
    steps = pipeline.named_steps
    if not isinstance(steps.get("featurizer"), TextFeaturizer) or not hasattr(steps.get("clf"), "predict_proba"):
        raise ModelLoadError(path, "pipeline must hold a 'featurizer' text featurizer and a 'clf' classifier")
    try:
        config = TrainConfig.from_dict(payload["config"])
        schema = ModelSchema.from_dict(payload["schema"])
    except (KeyError, TypeError, ValueError) as exc:
        raise ModelLoadError(path, f"invalid artifact metadata ({exc})") from exc

    model = SentimentModel(pipeline=pipeline, config=config)
    if model.feature_count != schema.feature_count:
        raise ModelLoadError(
            path,
            f"schema declares {schema.feature_count} features, pipeline has {model.feature_count}",
        )
    return model, schema
