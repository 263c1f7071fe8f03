import os
import subprocess
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parent.parent
SRC_PATH = REPO_ROOT / "src"


def _env_with_src() -> dict[str, str]:
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_PATH)
    env["MPLBACKEND"] = "Agg"
    return env


def test_train_xor_prints_truth_table() -> None:
    cmd = [
        sys.executable,
        "scripts/train_xor.py",
        "--epochs",
        "200",
        "--print-every",
        "100",
        "--seed",
        "0",
    ]
    result = subprocess.run(
        cmd,
        cwd=REPO_ROOT,
        env=_env_with_src(),
        check=True,
        capture_output=True,
        text=True,
    )
    assert "x1  x2  target  output" in result.stdout
    assert "MSE:" in result.stdout
    assert "=== Training Summary ===" in result.stdout
    assert "Epoch 200/200" in result.stderr


def test_train_xor_saves_plot(tmp_path) -> None:
    pytest.importorskip("matplotlib")
    plot_path = tmp_path / "loss.png"
    cmd = [
        sys.executable,
        "scripts/train_xor.py",
        "--epochs",
        "20",
        "--print-every",
        "0",
        "--plot",
        str(plot_path),
    ]
    subprocess.run(
        cmd,
        cwd=REPO_ROOT,
        env=_env_with_src(),
        check=True,
        capture_output=True,
        text=True,
    )
    assert plot_path.exists()
