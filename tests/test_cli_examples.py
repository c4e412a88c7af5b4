import importlib.util
import subprocess
import sys
from pathlib import Path

import pytest

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "generate_cli_examples.py"


@pytest.fixture
def examples_script(tmp_path, monkeypatch):
    spec = importlib.util.spec_from_file_location("generate_cli_examples", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    monkeypatch.setitem(sys.modules, spec.name, module)
    spec.loader.exec_module(module)
    monkeypatch.chdir(tmp_path)
    return module


def test_failing_example_stops_the_run(examples_script, monkeypatch):
    calls = []

    def failing_run(args, check):
        calls.append(args)
        raise subprocess.CalledProcessError(3, args)

    monkeypatch.setattr(examples_script.subprocess, "run", failing_run)
    with pytest.raises(subprocess.CalledProcessError):
        examples_script.main()
    assert len(calls) == 1


def test_missing_artifact_is_reported(examples_script, monkeypatch):
    monkeypatch.setattr(examples_script.subprocess, "run", lambda args, check: None)
    with pytest.raises(RuntimeError, match="was not created"):
        examples_script.main()


def test_examples_invoke_the_compare_script(examples_script):
    example = examples_script.EXAMPLES[0]
    args = example.full_args()
    assert args[:2] == ["python", "compare.py"]
    assert args[-2:] == ["--output-dir", str(example.directory)]
