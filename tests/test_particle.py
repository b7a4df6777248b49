import pytest

from particle import ParticleBundle
from registry import ParticleRegistry


def test_fade_out_holds_then_falls_linearly(make_bundle):
    bundle = make_bundle(length=10)
    fades = []
    for cursor in range(11):
        bundle.advance_to(cursor)
        fades.append(bundle.fade_out_opacity(5))

    assert fades[:8] == [1.0] * 8
    assert fades[8] == pytest.approx(1.0)
    assert fades[9] == pytest.approx(0.5)
    assert fades[10] == 0.0
    assert all(0.0 <= f <= 1.0 for f in fades)


def test_fade_out_starts_after_eighty_percent(make_bundle):
    bundle = make_bundle(length=100)
    bundle.advance_to(79)
    assert bundle.fade_out_opacity(5) == 1.0
    bundle.advance_to(90)
    assert bundle.fade_out_opacity(5) == pytest.approx(0.5)


def test_cursor_is_monotonic_and_bounded(make_bundle):
    bundle = make_bundle(length=5)
    bundle.advance_to(3)
    bundle.advance_to(1)
    assert bundle.cursor == 3
    bundle.advance_to(50)
    assert bundle.cursor == 5
    assert bundle.is_exhausted


def test_expiry_requires_exhaustion_and_visible_window(make_bundle):
    bundle = make_bundle(length=5)  # last point at t=400
    assert not bundle.is_expired(10_000, 2000)
    bundle.advance_to(5)
    assert not bundle.is_expired(2400, 2000)
    assert bundle.is_expired(2400.5, 2000)


def test_empty_path_is_immediately_retirable():
    bundle = ParticleBundle([], 0.0, (1, 1, 1), (1, 1, 1), (1, 1, 1))
    assert bundle.is_exhausted
    assert bundle.last_point_time is None
    assert bundle.fade_out_opacity(5) == 0.0
    assert bundle.is_expired(0.0, 2000)


def test_registry_sweep_visits_high_to_low_and_removes(make_bundle):
    registry = ParticleRegistry()
    bundles = [make_bundle(length=i + 1) for i in range(5)]
    registry.extend(bundles)

    visited = []

    def visit(bundle):
        visited.append(bundle)
        return len(bundle) % 2 == 0

    removed = registry.sweep(visit)
    assert visited == list(reversed(bundles))
    assert removed == 2
    assert list(registry) == [bundles[0], bundles[2], bundles[4]]
    assert len(registry) == 3

    registry.clear()
    assert not registry
