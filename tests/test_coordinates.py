from __future__ import annotations

import pytest

from core.config import CoordinateConfig
from core.coordinates import CoordinateExtractor
from core.models import CoordinateKind, CoordinateMatch


def _extractor(**overrides) -> CoordinateExtractor:
    return CoordinateExtractor(CoordinateConfig(**overrides))


def test_labelled_xyz_skips_xz(monkeypatch: pytest.MonkeyPatch) -> None:
    extractor = _extractor()

    def _fail(line: str):
        raise AssertionError("XZ detection must not run after an XYZ match")

    monkeypatch.setattr(extractor, "detect_xz", _fail)
    coords = extractor.extract("x: 1000 y: 64 z: -2000")
    assert coords == CoordinateMatch(1000, 64, -2000, CoordinateKind.XYZ)


def test_parenthesised_xyz() -> None:
    coords = _extractor().extract("base is at (2400, 70, -3100)")
    assert coords == CoordinateMatch(2400, 70, -3100, CoordinateKind.XYZ)


def test_bare_xyz() -> None:
    coords = _extractor().extract("coords 3000 64 4000")
    assert coords == CoordinateMatch(3000, 64, 4000, CoordinateKind.XYZ)


def test_bare_xz_pair() -> None:
    coords = _extractor().extract("stash at 2500 -3600")
    assert coords == CoordinateMatch(2500, None, -3600, CoordinateKind.XZ)


def test_bare_forms_keep_a_leading_minus() -> None:
    extractor = _extractor()
    assert extractor.extract("stash at -2500 3600") == CoordinateMatch(
        -2500, None, 3600, CoordinateKind.XZ
    )
    assert extractor.extract("base -3000 64 4000") == CoordinateMatch(
        -3000, 64, 4000, CoordinateKind.XYZ
    )


def test_only_ascii_digits_count() -> None:
    assert _extractor().extract("at ٢٥٠٠ ٣٦٠٠") is None


def test_labelled_xz_pair() -> None:
    coords = _extractor().extract("x 5000 z 6000")
    assert coords == CoordinateMatch(5000, None, 6000, CoordinateKind.XZ)


def test_xz_disabled() -> None:
    assert _extractor(detect_xz_coordinates=False).extract("stash at 2500 -3600") is None


def test_xz_below_min_value_is_not_a_match() -> None:
    extractor = _extractor(ignore_spawn_radius=False, min_coord_value=100)
    result = extractor.detect("(50, 60)")
    assert not result.matched
    assert result.coordinates is None


def test_xz_with_one_large_axis_passes_min_value() -> None:
    extractor = _extractor(ignore_spawn_radius=False, min_coord_value=100)
    assert extractor.extract("(50, 600)") == CoordinateMatch(50, None, 600, CoordinateKind.XZ)


def test_spawn_radius_suppresses_without_xz_fallback() -> None:
    extractor = _extractor(ignore_spawn_radius=True, spawn_radius=1500)
    line = "at 10 64 10 then 5000 6000"

    result = extractor.detect(line)
    assert result.matched
    assert result.coordinates is None
    # The XZ family alone would have found a pair on this line.
    assert extractor.detect_xz(line).coordinates == CoordinateMatch(
        5000, None, 6000, CoordinateKind.XZ
    )


def test_spawn_radius_disabled_keeps_small_coordinates() -> None:
    coords = _extractor(ignore_spawn_radius=False).extract("at 10 64 10")
    assert coords == CoordinateMatch(10, 64, 10, CoordinateKind.XYZ)


def test_spawn_radius_boundary_is_inclusive() -> None:
    extractor = _extractor(spawn_radius=1500)
    assert extractor.is_within_spawn_radius(900, 1200)
    assert not extractor.is_within_spawn_radius(900, 1201)


def test_out_of_range_numbers_are_not_coordinates() -> None:
    assert _extractor().extract("x: 99999999999 y: 64 z: 5") is None


def test_plain_text_has_no_coordinates() -> None:
    assert _extractor().extract("<Steve> hello everyone") is None
