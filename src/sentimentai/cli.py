# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import argparse
import sys
from typing import TextIO

from .config import LABEL_FORMATS, Settings, load_settings
from .console import HEADING, MLConsole
from .errors import DatasetLoadError, ModelLoadError, ModelSaveError, TrainingError
from .inference.predictor import load_predictor
from .training.trainer import train_and_export

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_DATASET = 3
EXIT_MODEL_LOAD = 4
EXIT_MODEL_SAVE = 5
EXIT_TRAINING = 6


class HelpOnErrorParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:
        self.print_help(sys.stderr)
        self.exit(EXIT_USAGE, f"\n{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = HelpOnErrorParser(prog="sentimentai", description=f"{HEADING}: train and query a text sentiment classifier.")
    parser.add_argument("-t", "--train", action="store_true", help="Train the model and save it")
    parser.add_argument("-i", "--interactive", action="store_true", help="Score lines read from standard input")
    parser.add_argument("-c", "--check", metavar="TEXT", default=None, help="Score a single text value")
    parser.add_argument("--data", default=None, help="Training TSV (text<TAB>label, header row)")
    parser.add_argument("--model", default=None, help="Model artifact path")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for split and optimizer")
    parser.add_argument("--test-fraction", type=float, default=None, help="Held-out fraction, between 0 and 1")
    parser.add_argument("--label-format", choices=LABEL_FORMATS, default=None, help="Boolean label convention")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.test_fraction is not None and not 0.0 < args.test_fraction < 1.0:
        parser.error("--test-fraction must be between 0 and 1")
    return args


def run_train(settings: Settings, console: MLConsole) -> int:
    try:
        train_and_export(
            data_path=settings.data_path,
            model_path=settings.model_path,
            config=settings.train,
            label_format=settings.label_format,
            console=console,
        )
    except DatasetLoadError as exc:
        console.error(str(exc))
        return EXIT_DATASET
    except TrainingError as exc:
        console.error(str(exc))
        return EXIT_TRAINING
    except ModelSaveError as exc:
        console.error(str(exc))
        return EXIT_MODEL_SAVE
    return EXIT_OK


def run_check(text: str, settings: Settings, console: MLConsole) -> int:
    try:
        engine = load_predictor(settings.model_path)
    except ModelLoadError as exc:
        console.error(str(exc))
        return EXIT_MODEL_LOAD
    console.single_prediction(text, engine.predict(text))
    return EXIT_OK


def run_interactive(settings: Settings, console: MLConsole, stdin: TextIO | None = None) -> int:
    try:
        engine = load_predictor(settings.model_path)
    except ModelLoadError as exc:
        console.error(str(exc))
        return EXIT_MODEL_LOAD

    stream = stdin
    if stream is None:
        stream = sys.stdin
        reconfigure = getattr(stream, "reconfigure", None)
        if reconfigure is not None:
            reconfigure(errors="replace")
    console.line("Enter value to check:")
    for raw in iter(stream.readline, ""):
        text = raw.rstrip("\r\n")
        if text == "":
            break
        console.prediction(text, engine.predict(text), with_tokens=True)
    return EXIT_OK


def run(args: argparse.Namespace, settings: Settings, console: MLConsole, stdin: TextIO | None = None) -> int:
    train_exit = EXIT_OK
    score_exit = EXIT_OK
    if args.train:
        train_exit = run_train(settings, console)
    if train_exit == EXIT_OK and args.check is not None:
        score_exit = run_check(args.check, settings, console)
        return score_exit
    if train_exit == EXIT_OK and score_exit == EXIT_OK and args.interactive:
        return run_interactive(settings, console, stdin)
    return train_exit + score_exit


def main(argv: list[str] | None = None) -> int:
    try:
        args = parse_args(argv)
    except SystemExit as exc:
        return int(exc.code or 0)

    settings = load_settings().with_overrides(
        data_path=args.data,
        model_path=args.model,
        seed=args.seed,
        test_fraction=args.test_fraction,
        label_format=args.label_format,
        color=False if args.no_color else None,
    )
    console = MLConsole(
        enabled=settings.color,
        positive_name=settings.positive_name,
        negative_name=settings.negative_name,
    )
    return run(args, settings, console)


if __name__ == "__main__":
    raise SystemExit(main())
