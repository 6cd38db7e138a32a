from __future__ import annotations

import stat
from pathlib import Path
from typing import Callable

import pytest

from polar_align.coords import WorldTransform

DATA_DIR = Path(__file__).parent / "data"

# Solution for img_01 as written by ASTAP
SAMPLE_CD = [
    -0.0006800583210471,
    0.006300323281833,
    0.006309995699828,
    0.0005179551839743,
]
SAMPLE_CRVAL = [234.5683671466, 88.14896797072]


@pytest.fixture
def data_dir() -> Path:
    return DATA_DIR


@pytest.fixture
def sample_transform() -> WorldTransform:
    return WorldTransform.from_mat2_translation(SAMPLE_CD, SAMPLE_CRVAL)


def write_fake_astap(
    install_dir: Path,
    *,
    banners: int = 1,
    hang: bool = False,
    wcs_source: Path | None = None,
    with_database: bool = True,
    latin1_output: bool = False,
) -> Path:
    """Create an astap_cli stand-in shell script and a star database file."""
    install_dir.mkdir(parents=True, exist_ok=True)
    wcs_source = wcs_source or DATA_DIR / "img_01.wcs"
    lines = [
        "#!/bin/sh",
        f'echo "$@" > "{install_dir / "args.txt"}"',
    ]
    if latin1_output:
        # Declination with a Latin-1 degree sign (0xb0), not valid UTF-8
        lines.append(r"printf '88\260 N\n'")
    lines += ['echo "ASTAP solver version CLI-2024.05.01"', 'echo "Searching..."'] * banners
    if hang:
        lines.append("exec sleep 30")
    else:
        lines += [
            'img="$2"',
            f'cp "{wcs_source}" "${{img%.*}}.wcs"',
            'echo "Solution found"',
        ]
    script = install_dir / "astap_cli"
    script.write_text("\n".join(lines) + "\n")
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    if with_database:
        (install_dir / "h18_0101.1476").write_bytes(b"")
    return install_dir


@pytest.fixture
def fake_astap(tmp_path: Path) -> Callable[..., Path]:
    def factory(**kwargs) -> Path:
        return write_fake_astap(tmp_path / "astap", **kwargs)

    return factory


@pytest.fixture
def image_path(tmp_path: Path) -> Path:
    path = tmp_path / "frames" / "img_01.jpg"
    path.parent.mkdir()
    path.write_bytes(b"\xff\xd8\xff\xd9")
    return path
