from __future__ import annotations

import io
from argparse import Namespace

import pytest

import joblib
from sklearn.linear_model import LogisticRegression
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import FunctionTransformer

from sentimentai import cli
from sentimentai.cli import (
    EXIT_DATASET,
    EXIT_MODEL_LOAD,
    EXIT_MODEL_SAVE,
    EXIT_OK,
    EXIT_USAGE,
    main,
    parse_args,
    run,
    run_check,
    run_interactive,
)


def _args(train=False, check=None, interactive=False) -> Namespace:
    return Namespace(train=train, check=check, interactive=interactive)


def _prediction_lines(out: str) -> list[str]:
    return [line for line in out.splitlines() if "Prediction:" in line]


class TestParseArgs:
    def test_short_and_long_flags(self):
        args = parse_args(["-t", "-i", "-c", "hello"])
        assert args.train and args.interactive and args.check == "hello"
        args = parse_args(["--check", ""])
        assert args.check == "" and not args.train

    def test_defaults(self):
        args = parse_args([])
        assert args.train is False and args.interactive is False and args.check is None


class TestMain:
    def test_unknown_flag_prints_help_and_fails(self, capsys, monkeypatch):
        called = []
        monkeypatch.setattr(cli, "run", lambda *a, **k: called.append(a) or 0)
        code = main(["--bogus"])
        assert code == EXIT_USAGE
        assert called == []
        err = capsys.readouterr().err
        assert "--train" in err and "--interactive" in err

    def test_check_missing_value(self, capsys):
        assert main(["--check"]) == EXIT_USAGE

    def test_bad_test_fraction(self):
        assert main(["-t", "--test-fraction", "2"]) == EXIT_USAGE

    def test_help_exits_zero(self, capsys):
        assert main(["--help"]) == EXIT_OK
        assert "--check" in capsys.readouterr().out

    def test_nothing_to_do(self):
        assert main([]) == EXIT_OK

    def test_train_then_check(self, settings, capsys):
        code = main(
            [
                "--train",
                "--data",
                str(settings.data_path),
                "--model",
                settings.model_path,
                "--no-color",
                "--check",
                "great product",
            ]
        )
        assert code == EXIT_OK
        out = capsys.readouterr().out
        assert "The model is saved to" in out
        assert len(_prediction_lines(out)) == 1

    def test_check_with_empty_model_path(self, capsys):
        code = main(["--model", "", "--check", "good product"])
        assert code != EXIT_OK
        captured = capsys.readouterr()
        assert _prediction_lines(captured.out) == []
        assert "ERROR" in captured.err

    def test_check_with_foreign_pipeline(self, trained_model_path, tmp_path, capsys):
        envelope = joblib.load(trained_model_path)
        envelope["pipeline"] = Pipeline([("other", FunctionTransformer()), ("clf", LogisticRegression())])
        forged = tmp_path / "forged.joblib"
        joblib.dump(envelope, forged)
        capsys.readouterr()
        assert main(["--model", str(forged), "--check", "good"]) == EXIT_MODEL_LOAD
        assert _prediction_lines(capsys.readouterr().out) == []

    def test_unwritable_model_path_aborts_after_metrics(self, settings, tmp_path, capsys):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory", encoding="utf-8")
        target = blocker / "model.joblib"
        code = main(["-t", "--data", str(settings.data_path), "--model", str(target), "--no-color"])
        assert code == EXIT_MODEL_SAVE
        captured = capsys.readouterr()
        assert "accuracy" in captured.out
        assert "The model is saved to" not in captured.out
        assert "ERROR" in captured.err
        assert not target.exists()
        assert sorted(p.name for p in tmp_path.iterdir()) == ["blocker", "train.tsv"]

    def test_env_configures_paths(self, settings, monkeypatch):
        monkeypatch.setenv("ML_DATA_PATH", str(settings.data_path))
        monkeypatch.setenv("ML_MODEL_PATH", settings.model_path)
        assert main(["-t"]) == EXIT_OK


class TestCheck:
    def test_prints_features_tokens_and_prediction(self, settings, console, trained_model_path, capsys):
        capsys.readouterr()
        assert run_check("Good product", settings, console) == EXIT_OK
        out = capsys.readouterr().out
        assert "Number of Features: " in out
        assert "Tokens: good,product" in out
        assert "Single Prediction" in out
        assert "Probability of being positive:" in out
        assert len(_prediction_lines(out)) == 1

    def test_empty_text_is_allowed(self, settings, console, trained_model_path, capsys):
        assert run_check("", settings, console) == EXIT_OK

    def test_missing_model(self, settings, console, capsys):
        assert run_check("good", settings, console) == EXIT_MODEL_LOAD
        assert _prediction_lines(capsys.readouterr().out) == []


class TestInteractive:
    def test_stops_on_empty_line(self, settings, console, trained_model_path, capsys):
        capsys.readouterr()
        stdin = io.StringIO("good product\nbad product\n\nnever scored\n")
        assert run_interactive(settings, console, stdin) == EXIT_OK
        lines = _prediction_lines(capsys.readouterr().out)
        assert len(lines) == 2
        assert lines[0].startswith("Text: good product | Tokens: good,product | Prediction: ")
        assert lines[1].startswith("Text: bad product | Tokens: bad,product | Prediction: ")

    def test_end_of_stream_ends_loop(self, settings, console, trained_model_path, capsys):
        capsys.readouterr()
        assert run_interactive(settings, console, io.StringIO("only line")) == EXIT_OK
        assert len(_prediction_lines(capsys.readouterr().out)) == 1

    def test_loads_model_once(self, settings, console, trained_model_path, monkeypatch):
        calls = []
        real = cli.load_predictor

        def counting(path):
            calls.append(path)
            return real(path)

        monkeypatch.setattr(cli, "load_predictor", counting)
        run_interactive(settings, console, io.StringIO("a\nb\nc\n\n"))
        assert len(calls) == 1

    def test_undecodable_stdin_is_replaced(self, settings, console, trained_model_path, capsys, monkeypatch):
        raw = io.TextIOWrapper(io.BytesIO(b"caf\xe9 good\n\n"), encoding="utf-8")
        monkeypatch.setattr(cli.sys, "stdin", raw)
        capsys.readouterr()
        assert run_interactive(settings, console) == EXIT_OK
        lines = _prediction_lines(capsys.readouterr().out)
        assert len(lines) == 1
        assert lines[0].startswith("Text: caf\ufffd good |")

    def test_missing_model(self, settings, console, capsys):
        assert run_interactive(settings, console, io.StringIO("good\n")) == EXIT_MODEL_LOAD
        assert _prediction_lines(capsys.readouterr().out) == []


class TestRun:
    def test_failed_training_skips_scoring(self, settings, console, tmp_path, monkeypatch):
        scored = []
        monkeypatch.setattr(cli, "run_check", lambda *a: scored.append(a) or EXIT_OK)
        monkeypatch.setattr(cli, "run_interactive", lambda *a: scored.append(a) or EXIT_OK)
        broken = settings.with_overrides(data_path=str(tmp_path / "missing.tsv"))
        assert run(_args(train=True, check="x", interactive=True), broken, console) == EXIT_DATASET
        assert scored == []

    def test_check_wins_over_interactive(self, settings, console, monkeypatch):
        monkeypatch.setattr(cli, "run_check", lambda *a: 7)
        monkeypatch.setattr(cli, "run_interactive", lambda *a: pytest.fail("interactive should not run"))
        assert run(_args(check="x", interactive=True), settings, console) == 7

    def test_interactive_after_training(self, settings, console, monkeypatch):
        monkeypatch.setattr(cli, "run_train", lambda *a: EXIT_OK)
        monkeypatch.setattr(cli, "run_interactive", lambda *a: 9)
        assert run(_args(train=True, interactive=True), settings, console) == 9

    def test_nothing_selected(self, settings, console):
        assert run(_args(), settings, console) == EXIT_OK

    def test_training_only_returns_train_code(self, settings, console, monkeypatch):
        monkeypatch.setattr(cli, "run_train", lambda *a: EXIT_DATASET)
        assert run(_args(train=True), settings, console) == EXIT_DATASET
