# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from sklearn.linear_model import LogisticRegression
from sklearn.pipeline import Pipeline

from ..console import MLConsole
from ..errors import ModelSaveError, TrainingError
from ..evaluation.evaluate import evaluate_model
from ..features import TextFeaturizer
from ..model import SentimentModel
from ..model_store import metrics_path_for, save_model, write_metrics
from ..schemas import Record, TrainConfig, TrainingReport
from .dataset import load_dataset, split_dataset


def _build_model(config: TrainConfig) -> Pipeline:
    # liblinear's dual solver is coordinate ascent on the L2-regularized dual problem.
    return Pipeline(
        steps=[
            ("featurizer", TextFeaturizer.from_options(config.featurizer)),
            (
                "clf",
                LogisticRegression(
                    solver="liblinear",
                    dual=True,
                    C=config.regularization,
                    max_iter=config.max_iter,
                    random_state=config.seed,
                ),
            ),
        ]
    )


def fit(records: Sequence[Record], config: TrainConfig) -> SentimentModel:
    if not records:
        raise TrainingError("training subset is empty")
    labels = [int(bool(record.label)) for record in records]
    if len(set(labels)) < 2:
        raise TrainingError("training subset contains a single class")

    pipeline = _build_model(config)
    try:
        pipeline.fit([record.text for record in records], labels)
    except ValueError as exc:
        raise TrainingError(f"fit failed: {exc}") from exc
    return SentimentModel(pipeline=pipeline, config=config)


def train_and_export(
    *,
    data_path: Path | str,
    model_path: Path | str,
    config: TrainConfig,
    label_format: str = "auto",
    console: MLConsole | None = None,
) -> TrainingReport:
    """Load, split, fit, evaluate and persist.

    Dataset and fit errors propagate before anything is written. A model save
    error propagates after the metrics have been printed; a metrics sidecar
    failure only warns, since the model is already in place.
    """
    console = console or MLConsole()
    records = load_dataset(data_path, label_format=label_format)
    train_records, test_records = split_dataset(records, test_fraction=config.test_fraction, seed=config.seed)
    console.info(f"dataset={data_path} rows={len(records)} train={len(train_records)} test={len(test_records)}")
    if len({record.label for record in test_records}) < 2:
        console.warn("test split holds a single class; auc and auprc are reported as 0")

    model = fit(train_records, config)
    console.info(f"features={model.feature_count} classifier={type(model.classifier).__name__}")

    metrics = evaluate_model(model, test_records)
    console.metrics_table(metrics, title=f"Metrics for {type(model.classifier).__name__} binary classification model")

    saved = save_model(model, model.schema, model_path)
    console.success(f"The model is saved to {saved}")
    metrics_file = ""
    try:
        metrics_file = str(write_metrics(metrics, metrics_path_for(saved)))
    except ModelSaveError as exc:
        console.warn(f"metrics sidecar not written: {exc}")
    return TrainingReport(
        metrics=metrics,
        train_rows=len(train_records),
        test_rows=len(test_records),
        model_path=str(saved),
        metrics_path=metrics_file,
    )
