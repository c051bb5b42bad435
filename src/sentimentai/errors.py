# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

from pathlib import Path


class SentimentError(Exception):
    """Base class for errors reported by the sentiment CLI."""


class DatasetLoadError(SentimentError):
    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"cannot load dataset {self.path}: {reason}")


class TrainingError(SentimentError):
    pass


class ModelLoadError(SentimentError):
    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"cannot load model {self.path or '<empty path>'}: {reason}")


class ModelSaveError(SentimentError):
    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"cannot save model {self.path}: {reason}")
