# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import math
from collections.abc import Sequence
from pathlib import Path

from sklearn.metrics import (
    accuracy_score,
    average_precision_score,
    confusion_matrix,
    f1_score,
    log_loss,
    precision_score,
    recall_score,
    roc_auc_score,
)

from ..model import SentimentModel
from ..model_store import load_model
from ..schemas import Record
from ..training.dataset import load_dataset


def _safe_score(scorer, y_true: Sequence[int], y_prob: Sequence[float]) -> float:
    if len(set(y_true)) < 2:
        return 0.0
    value = float(scorer(y_true, y_prob))
    if value != value:  # NaN
        return 0.0
    return value


def _entropy(positive_rate: float) -> float:
    if positive_rate <= 0.0 or positive_rate >= 1.0:
        return 0.0
    return -(positive_rate * math.log(positive_rate) + (1.0 - positive_rate) * math.log(1.0 - positive_rate))


def binary_metrics(y_true: Sequence[int], y_prob: Sequence[float], threshold: float = 0.5) -> dict[str, float]:
    y_true = [int(value) for value in y_true]
    y_prob = [float(value) for value in y_prob]
    if not y_true:
        raise ValueError("cannot compute metrics on an empty test set")
    y_pred = [1 if score >= threshold else 0 for score in y_prob]
    tn, fp, fn, tp = confusion_matrix(y_true, y_pred, labels=[0, 1]).ravel()

    loss = float(log_loss(y_true, y_prob, labels=[0, 1]))
    prior = _entropy(sum(y_true) / len(y_true))
    return {
        "accuracy": float(accuracy_score(y_true, y_pred)),
        "auc": _safe_score(roc_auc_score, y_true, y_prob),
        "auprc": _safe_score(average_precision_score, y_true, y_prob),
        "f1": float(f1_score(y_true, y_pred, zero_division=0)),
        "log_loss": loss,
        "log_loss_reduction": (prior - loss) / prior if prior > 0.0 else 0.0,
        "positive_precision": float(precision_score(y_true, y_pred, zero_division=0)),
        "positive_recall": float(recall_score(y_true, y_pred, zero_division=0)),
        "negative_precision": float(precision_score(y_true, y_pred, pos_label=0, zero_division=0)),
        "negative_recall": float(recall_score(y_true, y_pred, pos_label=0, zero_division=0)),
        "tn": float(tn),
        "fp": float(fp),
        "fn": float(fn),
        "tp": float(tp),
    }


def threshold_report(y_true: Sequence[int], y_prob: Sequence[float]) -> list[dict[str, float]]:
    y_true = [int(value) for value in y_true]
    report: list[dict[str, float]] = []
    for raw in range(5, 96, 5):
        thr = raw / 100.0
        y_pred = [1 if score >= thr else 0 for score in y_prob]
        report.append(
            {
                "threshold": float(thr),
                "precision": float(precision_score(y_true, y_pred, zero_division=0)),
                "recall": float(recall_score(y_true, y_pred, zero_division=0)),
                "f1": float(f1_score(y_true, y_pred, zero_division=0)),
            }
        )
    return report


def evaluate_model(model: SentimentModel, records: Sequence[Record], threshold: float = 0.5) -> dict[str, float]:
    y_true = [int(bool(record.label)) for record in records]
    y_prob = model.predict_proba(record.text for record in records)
    return binary_metrics(y_true, y_prob, threshold=threshold)


def evaluate_saved_model(*, model_path: Path | str, dataset_path: Path | str, label_format: str = "auto") -> dict[str, float]:
    model, _schema = load_model(model_path)
    records = load_dataset(dataset_path, label_format=label_format)
    return evaluate_model(model, records)
