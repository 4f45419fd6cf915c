import pytest

from fmtones.module import Module


class _Gain(Module):
    def process(self, inbufs, control_in, control_last):
        return [[sample * control_in[0] for sample in inbufs[0]]]


def test_base_class_cannot_be_instantiated():
    with pytest.raises(TypeError):
        Module()


def test_base_process_raises_not_implemented():
    block = [[0] * Module.n]
    with pytest.raises(NotImplementedError):
        Module.process(_Gain(), block, [0], [0])


def test_subclass_block_keeps_base_process_abstract():
    gain = _Gain()
    out = gain.process([list(range(Module.n))], [2], [2])
    assert Module.n == 1 << Module.lg_n
    assert len(out[0]) == Module.n
    assert out[0][-1] == 2 * (Module.n - 1)
    with pytest.raises(NotImplementedError):
        Module.process(gain, [list(range(Module.n))], [2], [2])