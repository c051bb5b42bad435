from __future__ import annotations

import os
from pathlib import Path

import pytest

from sentimentai.config import Settings
from sentimentai.console import MLConsole
from sentimentai.schemas import TrainConfig
from sentimentai.training.trainer import train_and_export

POSITIVE_TEXTS = [
    "I love this product",
    "Absolutely wonderful experience",
    "Great quality and fast delivery",
    "This is the best purchase I made",
    "Very happy with the service",
    "Excellent, would buy again",
    "The staff were friendly and helpful",
    "Fantastic value for money",
    "Works perfectly, highly recommend",
    "Such a pleasant surprise",
    "Good product, happy customer",
    "Really nice and easy to use",
]

NEGATIVE_TEXTS = [
    "I hate this product",
    "Absolutely terrible experience",
    "Poor quality and slow delivery",
    "This is the worst purchase I made",
    "Very unhappy with the service",
    "Awful, never buying again",
    "The staff were rude and unhelpful",
    "Waste of money",
    "Broke after one day, do not recommend",
    "Such a disappointment",
    "Bad product, unhappy customer",
    "Really confusing and hard to use",
]


def write_tsv(path: Path, rows: list[tuple[str, str]], header: str = "SentimentText\tSentiment") -> Path:
    lines = [header] + [f"{text}\t{label}" for text, label in rows]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _clean_ml_env(monkeypatch):
    for name in list(os.environ):
        if name.startswith("ML_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sample_rows() -> list[tuple[str, str]]:
    rows = [(text, "1") for text in POSITIVE_TEXTS] + [(text, "0") for text in NEGATIVE_TEXTS]
    # interleave so file order is not sorted by label
    return [row for pair in zip(rows[: len(POSITIVE_TEXTS)], rows[len(POSITIVE_TEXTS) :]) for row in pair]


@pytest.fixture
def dataset_path(tmp_path: Path, sample_rows) -> Path:
    return write_tsv(tmp_path / "train.tsv", sample_rows)


@pytest.fixture
def settings(tmp_path: Path, dataset_path: Path) -> Settings:
    return Settings(
        data_path=dataset_path,
        model_path=str(tmp_path / "model" / "sentiment_model.joblib"),
        color=False,
        train=TrainConfig(seed=1, test_fraction=0.25),
    )


@pytest.fixture
def console() -> MLConsole:
    return MLConsole(enabled=False)


@pytest.fixture
def trained_model_path(settings: Settings, console: MLConsole) -> Path:
    report = train_and_export(
        data_path=settings.data_path,
        model_path=settings.model_path,
        config=settings.train,
        console=console,
    )
    return Path(report.model_path)
