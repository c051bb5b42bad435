# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
"""Sentiment classification CLI package."""

from .inference.predictor import PredictionEngine, load_predictor
from .model import SentimentModel
from .schemas import PredictionResult, Record, TrainConfig

__all__ = ["Record", "TrainConfig", "PredictionResult", "SentimentModel", "PredictionEngine", "load_predictor"]
