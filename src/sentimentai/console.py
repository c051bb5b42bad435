# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

from dataclasses import dataclass

from rich.console import Console
from rich.markup import escape
from rich.table import Table

HEADING = "sentiment detector 1.0.0-beta"


@dataclass
class MLConsole:
    enabled: bool = True
    positive_name: str = "positive"
    negative_name: str = "negative"

    def __post_init__(self) -> None:
        self._console = Console(
            color_system="auto" if self.enabled else None,
            highlight=self.enabled,
            emoji=False,
            soft_wrap=True,
        )
        self._stderr = Console(color_system="auto" if self.enabled else None, emoji=False, soft_wrap=True, stderr=True)

    def info(self, text: str) -> None:
        self._console.print(f"[bold cyan]INFO[/bold cyan] {escape(text)}")

    def warn(self, text: str) -> None:
        self._console.print(f"[bold yellow]WARN[/bold yellow] {escape(text)}")

    def success(self, text: str) -> None:
        self._console.print(f"[bold green]OK[/bold green] {escape(text)}")

    def error(self, text: str) -> None:
        self._stderr.print(f"[bold red]ERROR[/bold red] {escape(text)}")

    def line(self, text: str = "") -> None:
        self._console.print(text, markup=False, highlight=False)

    def metrics_table(self, metrics: dict[str, float], *, title: str) -> None:
        table = Table(title=title, show_lines=True)
        table.add_column("Metric", style="bold")
        table.add_column("Value", justify="right")
        for key in sorted(metrics.keys()):
            table.add_row(key, f"{float(metrics[key]):.4f}")
        self._console.print(table)

    def label_name(self, label: bool) -> str:
        return self.positive_name if label else self.negative_name

    def prediction(self, text: str, result, *, with_tokens: bool = False) -> None:
        parts = [f"Text: {text}"]
        if with_tokens:
            parts.append(f"Tokens: {','.join(result.tokens)}")
        parts.append(f"Prediction: {self.label_name(result.label)}")
        parts.append(f"Probability of being {self.positive_name}: {result.probability:.6f}")
        self.line(" | ".join(parts))

    def single_prediction(self, text: str, result) -> None:
        self.line(f"Number of Features: {result.feature_count}")
        self.line(f"Tokens: {','.join(result.tokens)}")
        self.line("=============== Single Prediction ===============")
        self.prediction(text, result)
        self.line("=============== End of Process ===============")
