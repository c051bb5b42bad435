# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import csv
import math
from collections import Counter
from pathlib import Path

import pandas as pd
from sklearn.model_selection import train_test_split

from ..errors import DatasetLoadError
from ..schemas import Record

TRUE_FALSE_LABELS = {"true": True, "false": False}
BINARY_LABELS = {"1": True, "0": False}
LABEL_CONVENTIONS = {
    "truefalse": TRUE_FALSE_LABELS,
    "binary": BINARY_LABELS,
    "auto": {**TRUE_FALSE_LABELS, **BINARY_LABELS},
}


def parse_label(value: object, label_format: str = "auto") -> bool:
    try:
        accepted = LABEL_CONVENTIONS[label_format]
    except KeyError:
        raise ValueError(f"unknown label format {label_format!r}") from None
    key = str(value if value is not None else "").strip().lower()
    if key not in accepted:
        raise ValueError(f"invalid {label_format} label {value!r}")
    return accepted[key]


def _read_rows(path: Path) -> pd.DataFrame:
    try:
        return pd.read_csv(
            path,
            sep="\t",
            header=None,
            dtype=str,
            keep_default_na=False,
            quoting=csv.QUOTE_NONE,
            encoding="utf-8",
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError:
        raise DatasetLoadError(path, "file is empty") from None
    except pd.errors.ParserError as exc:
        raise DatasetLoadError(path, f"malformed TSV ({exc})") from exc
    except UnicodeDecodeError as exc:
        raise DatasetLoadError(path, f"not valid UTF-8 ({exc.reason})") from exc
    except OSError as exc:
        raise DatasetLoadError(path, exc.strerror or str(exc)) from exc


def load_dataset(path: Path | str, label_format: str = "auto") -> list[Record]:
    """Load a ``text<TAB>label`` file with a header row into records.

    Raises :class:`DatasetLoadError` naming ``path`` for every way the file
    can be unusable for binary training.
    """
    path = Path(path)
    if not path.is_file():
        raise DatasetLoadError(path, "file not found")

    frame = _read_rows(path)
    if frame.shape[1] != 2:
        raise DatasetLoadError(path, f"expected 2 columns (text, label), found {frame.shape[1]}")

    header_label = frame.iat[0, 1]
    try:
        parse_label(header_label, label_format)
    except ValueError:
        pass
    else:
        raise DatasetLoadError(path, "missing header row")

    body = frame.iloc[1:]
    if body.empty:
        raise DatasetLoadError(path, "no data rows")

    records: list[Record] = []
    for offset, (text, raw_label) in enumerate(body.itertuples(index=False, name=None), start=2):
        if not isinstance(raw_label, str):
            raise DatasetLoadError(path, f"line {offset}: expected 2 columns (text, label)")
        try:
            label = parse_label(raw_label, label_format)
        except ValueError as exc:
            raise DatasetLoadError(path, f"line {offset}: {exc}") from exc
        records.append(Record(text=text if isinstance(text, str) else "", label=label))

    if len({record.label for record in records}) < 2:
        raise DatasetLoadError(path, "dataset needs both positive and negative labels")
    return records


def _can_stratify(labels: list[bool], test_fraction: float) -> bool:
    counts = Counter(labels)
    if len(counts) < 2 or min(counts.values()) < 2:
        return False
    test_rows = math.ceil(len(labels) * test_fraction)
    train_rows = len(labels) - test_rows
    return test_rows >= len(counts) and train_rows >= len(counts)


def split_dataset(records: list[Record], *, test_fraction: float, seed: int) -> tuple[list[Record], list[Record]]:
    if not 0.0 < test_fraction < 1.0:
        raise ValueError(f"test_fraction must be in (0, 1), got {test_fraction}")
    if len(records) < 2:
        raise ValueError("need at least 2 records to split")
    labels = [bool(record.label) for record in records]
    train, test = train_test_split(
        records,
        test_size=test_fraction,
        random_state=seed,
        shuffle=True,
        stratify=labels if _can_stratify(labels, test_fraction) else None,
    )
    return list(train), list(test)


def to_dataframe(records: list[Record]) -> pd.DataFrame:
    data = [{"text": record.text, "label": record.label} for record in records]
    return pd.DataFrame(data, columns=["text", "label"])
