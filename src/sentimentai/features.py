# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterable
from dataclasses import asdict

import numpy as np
from scipy import sparse
from sklearn.base import BaseEstimator, TransformerMixin
from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS, TfidfVectorizer

from .schemas import FeaturizerOptions

WHITESPACE_RE = re.compile(r"\s+")
DIGIT_RE = re.compile(r"\d")
CASE_MODES = ("lower", "upper", "none")


def _safe_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value != value:  # NaN
        return ""
    return str(value)


def _strip_diacritics(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(char for char in decomposed if unicodedata.category(char) != "Mn")
    return unicodedata.normalize("NFC", stripped)


def _strip_punctuation(text: str) -> str:
    return "".join(" " if unicodedata.category(char).startswith("P") else char for char in text)


def normalize_text(value: object, options: FeaturizerOptions) -> str:
    text = _safe_text(value)
    if options.case_mode == "lower":
        text = text.lower()
    elif options.case_mode == "upper":
        text = text.upper()
    if not options.keep_diacritics:
        text = _strip_diacritics(text)
    if not options.keep_numbers:
        text = DIGIT_RE.sub(" ", text)
    if not options.keep_punctuations:
        text = _strip_punctuation(text)
    return WHITESPACE_RE.sub(" ", text).strip()


def output_tokens(value: object, options: FeaturizerOptions) -> list[str]:
    tokens = normalize_text(value, options).split(" ")
    tokens = [token for token in tokens if token]
    if options.remove_stop_words:
        tokens = [token for token in tokens if token.lower() not in ENGLISH_STOP_WORDS]
    return tokens


class TextFeaturizer(TransformerMixin, BaseEstimator):
    """Normalize raw text and weight its n-grams with TF-IDF.

    Character n-grams of exactly ``char_ngram_length`` are always produced.
    Word n-grams of length 1..``word_ngram_length`` are appended when that
    length is positive. Stop words are dropped from the token stream before
    either vectorizer sees it.
    """

    def __init__(
        self,
        case_mode: str = "lower",
        keep_diacritics: bool = True,
        keep_numbers: bool = True,
        keep_punctuations: bool = True,
        char_ngram_length: int = 3,
        word_ngram_length: int = 0,
        remove_stop_words: bool = False,
    ) -> None:
        self.case_mode = case_mode
        self.keep_diacritics = keep_diacritics
        self.keep_numbers = keep_numbers
        self.keep_punctuations = keep_punctuations
        self.char_ngram_length = char_ngram_length
        self.word_ngram_length = word_ngram_length
        self.remove_stop_words = remove_stop_words

    @classmethod
    def from_options(cls, options: FeaturizerOptions) -> "TextFeaturizer":
        return cls(**asdict(options))

    @property
    def options(self) -> FeaturizerOptions:
        return FeaturizerOptions(
            case_mode=self.case_mode,
            keep_diacritics=self.keep_diacritics,
            keep_numbers=self.keep_numbers,
            keep_punctuations=self.keep_punctuations,
            char_ngram_length=self.char_ngram_length,
            word_ngram_length=self.word_ngram_length,
            remove_stop_words=self.remove_stop_words,
        )

    def _prepare(self, texts: Iterable[object]) -> list[str]:
        options = self.options
        return [" ".join(output_tokens(text, options)) for text in texts]

    def fit(self, X: Iterable[object], y: object = None) -> "TextFeaturizer":
        if self.case_mode not in CASE_MODES:
            raise ValueError(f"case_mode must be one of {CASE_MODES}, got {self.case_mode!r}")
        prepared = self._prepare(X)
        self.char_vectorizer_ = TfidfVectorizer(
            analyzer="char",
            ngram_range=(self.char_ngram_length, self.char_ngram_length),
            lowercase=False,
            dtype=np.float32,
        )
        self.char_vectorizer_.fit(prepared)
        self.word_vectorizer_ = None
        if self.word_ngram_length > 0:
            self.word_vectorizer_ = TfidfVectorizer(
                analyzer="word",
                ngram_range=(1, self.word_ngram_length),
                token_pattern=r"\S+",
                lowercase=False,
                dtype=np.float32,
            )
            self.word_vectorizer_.fit(prepared)
        self.feature_count_ = self._vocabulary_size()
        return self

    def _vocabulary_size(self) -> int:
        total = len(self.char_vectorizer_.vocabulary_)
        if self.word_vectorizer_ is not None:
            total += len(self.word_vectorizer_.vocabulary_)
        return total

    def transform(self, X: Iterable[object]) -> sparse.csr_matrix:
        prepared = self._prepare(X)
        blocks = [self.char_vectorizer_.transform(prepared)]
        if self.word_vectorizer_ is not None:
            blocks.append(self.word_vectorizer_.transform(prepared))
        return sparse.hstack(blocks, format="csr")

    @property
    def feature_count(self) -> int:
        return int(getattr(self, "feature_count_", 0))

    def tokens(self, text: object) -> list[str]:
        return output_tokens(text, self.options)
