#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
from pathlib import Path

from sentimentai.evaluation.evaluate import threshold_report
from sentimentai.model_store import load_model
from sentimentai.training.dataset import load_dataset


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Report precision/recall/F1 of a saved model across decision thresholds.")
    parser.add_argument("--model", default="model/sentiment_model.joblib", help="Model artifact path")
    parser.add_argument("--eval", default="data/sentiment_test.tsv", help="Evaluation TSV (text<TAB>label, header row)")
    parser.add_argument("--label-format", default="auto", choices=("auto", "truefalse", "binary"))
    parser.add_argument("--output", default="model/threshold_eval.json", help="JSON report output")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    output_path = Path(args.output)

    model, _schema = load_model(args.model)
    records = load_dataset(args.eval, label_format=args.label_format)
    y_true = [int(bool(record.label)) for record in records]
    probs = model.predict_proba(record.text for record in records)

    rows = threshold_report(y_true, probs)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(rows, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")

    print(f"[OK] report: {output_path}")
    for row in rows:
        print(
            f"thr={row['threshold']:.2f} "
            f"prec={row['precision']:.3f} rec={row['recall']:.3f} f1={row['f1']:.3f}"
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
