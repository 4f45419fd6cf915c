import pytest

from fmtones.env import Envelope, scale_outlevel

FULL = 127 << 5


def run(env, count):
    return [env.getsample() for _ in range(count)]


def settle(env, count=3000):
    return run(env, count)[-1]


def test_scale_outlevel_table_end():
    assert scale_outlevel(19) == 46


def test_scale_outlevel_full_scale():
    assert scale_outlevel(99) == 127


@pytest.mark.parametrize("level", range(20, 99))
def test_scale_outlevel_linear_above_table(level):
    assert scale_outlevel(level + 1) - scale_outlevel(level) == 1


def test_scale_outlevel_monotonic():
    values = [scale_outlevel(n) for n in range(100)]
    assert values == sorted(values)
    assert len(set(values)) == len(values)


def test_scale_outlevel_rejects_negative():
    with pytest.raises(ValueError):
        scale_outlevel(-1)


def test_wrong_number_of_rates():
    with pytest.raises(ValueError):
        Envelope([99, 99, 99], [99, 99, 99, 0], FULL, 0)


def test_wrong_number_of_levels():
    with pytest.raises(ValueError):
        Envelope([99] * 4, [99, 99, 99, 0, 0], FULL, 0)


def test_release_reaches_floor():
    env = Envelope([99] * 4, [99, 99, 99, 0], FULL, 0)
    settle(env)
    env.keydown(False)
    assert settle(env) == 16 << 16


def test_sustain_holds_while_key_down():
    env = Envelope([99] * 4, [99, 90, 70, 0], FULL, 0)
    samples = run(env, 2000)
    assert samples[-1] == samples[-500]
    assert samples[-1] < max(samples)


def test_outlevel_shifts_settled_level():
    low = Envelope([99] * 4, [99, 90, 70, 0], FULL - 32, 0)
    high = Envelope([99] * 4, [99, 90, 70, 0], FULL, 0)
    assert settle(high) - settle(low) == 32 << 16


def test_attack_is_monotonic_until_peak():
    env = Envelope([40, 99, 99, 99], [99, 99, 99, 0], FULL, 0)
    samples = run(env, 5000)
    assert samples == sorted(samples)
    assert samples[-1] == max(samples)


def test_decay_is_monotonic():
    env = Envelope([99, 50, 50, 50], [99, 0, 0, 0], FULL, 0)
    samples = run(env, 3000)
    peak = samples.index(max(samples))
    tail = samples[peak:]
    assert tail == sorted(tail, reverse=True)


def _steps_to_floor(rate_scaling):
    env = Envelope([99, 50, 50, 50], [99, 0, 0, 0], FULL, rate_scaling)
    samples = run(env, 5000)
    return samples.index(min(samples))


def test_rate_scaling_speeds_up_envelope():
    assert _steps_to_floor(8) < _steps_to_floor(0)


def test_keydown_same_state_is_ignored():
    a = Envelope([60] * 4, [99, 90, 70, 0], FULL, 0)
    b = Envelope([60] * 4, [99, 90, 70, 0], FULL, 0)
    first = run(a, 10)
    run(b, 10)
    b.keydown(True)
    a.keydown(True)
    assert run(a, 200) == run(b, 200)
    assert first[0] <= first[-1]


def test_retrigger_after_release_restarts_attack():
    env = Envelope([99] * 4, [99, 90, 70, 0], FULL, 0)
    sustain = settle(env)
    env.keydown(False)
    floor = settle(env)
    env.keydown(True)
    assert settle(env) == sustain
    assert floor < sustain


def test_setparam_level_changes_sustain():
    changed = Envelope([99] * 4, [99, 90, 70, 0], FULL, 0)
    changed.setparam(6, 99)
    reference = Envelope([99] * 4, [99, 90, 99, 0], FULL, 0)
    assert settle(changed) == settle(reference)


def test_setparam_rate_changes_speed():
    changed = Envelope([99, 99, 99, 99], [99, 0, 0, 0], FULL, 0)
    changed.setparam(1, 50)
    reference = Envelope([99, 50, 99, 99], [99, 0, 0, 0], FULL, 0)
    assert run(changed, 1500) == run(reference, 1500)


def test_setparam_unknown_is_ignored():
    changed = Envelope([99] * 4, [99, 90, 70, 0], FULL, 0)
    changed.setparam(8, 0)
    changed.setparam(-1, 0)
    reference = Envelope([99] * 4, [99, 90, 70, 0], FULL, 0)
    assert run(changed, 500) == run(reference, 500)