from playback import FixedIntervalReveal, FreeRunningReveal, build_disciplines

import constants


def test_free_running_reveals_one_point_per_frame(make_bundle):
    discipline = FreeRunningReveal()
    bundle = make_bundle(length=3)

    view = discipline.frame_view(bundle, now=123456.0)
    assert view.head_points == (bundle.path_points[0],)
    assert view.trail_points == ()
    assert view.target_cursor == 1

    bundle.advance_to(view.target_cursor)
    view = discipline.frame_view(bundle, now=0.0)
    assert view.head_points == (bundle.path_points[1],)
    assert view.target_cursor == 2

    bundle.advance_to(3)
    view = discipline.frame_view(bundle, now=0.0)
    assert view.head_points == ()
    assert view.target_cursor == 3


def test_fixed_interval_windows_follow_wall_clock(sim_config, make_bundle):
    discipline = FixedIntervalReveal(sim_config)
    bundle = make_bundle(length=60)

    assert discipline.windows(bundle, 1000.0) == (0, 10, 8, 10)
    view = discipline.frame_view(bundle, 1000.0)
    assert view.head_points == bundle.path_points[8:10]
    assert view.trail_points == bundle.path_points[0:10]
    assert view.target_cursor == 10


def test_fixed_interval_windows_clamp_before_launch(sim_config, make_bundle):
    discipline = FixedIntervalReveal(sim_config)
    bundle = make_bundle(length=60, t0=5000.0)

    assert discipline.windows(bundle, 1000.0) == (0, 0, 0, 0)
    view = discipline.frame_view(bundle, 1000.0)
    assert view.head_points == ()
    assert view.trail_points == ()
    assert view.target_cursor == 0


def test_fixed_interval_windows_clamp_past_the_end(sim_config, make_bundle):
    discipline = FixedIntervalReveal(sim_config)
    bundle = make_bundle(length=60)

    trail_begin, trail_end, head_begin, head_end = discipline.windows(bundle, 7000.0)
    assert (trail_begin, trail_end, head_begin, head_end) == (48, 60, 60, 60)
    view = discipline.frame_view(bundle, 7000.0)
    assert view.head_points == ()
    assert len(view.trail_points) == 12
    assert view.target_cursor == 60


def test_fixed_interval_never_reveals_ahead_of_time(sim_config, make_bundle):
    discipline = FixedIntervalReveal(sim_config)
    bundle = make_bundle(length=60)
    for now in range(0, 8000, 37):
        view = discipline.frame_view(bundle, float(now))
        assert view.target_cursor == min(now // 100, 60)
        assert all(now - p.time <= sim_config['highlight_duration_ms'] for p in view.head_points)
        assert all(p.time <= now for p in view.head_points)


def test_build_disciplines_covers_every_mode(sim_config):
    disciplines = build_disciplines(sim_config)
    for _, _, name in constants.MODE_TABLE.values():
        assert disciplines[name].name == name
