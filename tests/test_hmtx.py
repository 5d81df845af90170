import struct

from sfntkit.binary import make_tag
from sfntkit.hmtx import HMTX, HMetric, Hmtx

_METRICS = [(500, -10), (600, 20)]
_LSBS = [5, -5]


def _hmtx_bytes():
    data = b"".join(struct.pack(">Hh", *m) for m in _METRICS)
    return data + b"".join(struct.pack(">h", v) for v in _LSBS)


def test_hmetrics_and_lsbs():
    hmtx = Hmtx(_hmtx_bytes(), num_glyphs=4, num_hmetrics=2)
    assert hmtx.hmetrics() == [HMetric(a, b) for a, b in _METRICS]
    assert hmtx.lsbs() == _LSBS


def test_no_trailing_lsbs_when_all_glyphs_have_metrics():
    hmtx = Hmtx(_hmtx_bytes(), num_glyphs=2, num_hmetrics=2)
    assert hmtx.lsbs() == []
    assert len(hmtx.hmetrics()) == 2


def test_fewer_glyphs_than_metrics_gives_no_lsbs():
    hmtx = Hmtx(_hmtx_bytes(), num_glyphs=1, num_hmetrics=2)
    assert hmtx.lsbs() == []


def test_truncated_metrics_give_empty_list():
    hmtx = Hmtx(_hmtx_bytes()[:6], num_glyphs=4, num_hmetrics=2)
    assert hmtx.hmetrics() == []
    assert hmtx.lsbs() == []


def test_truncated_lsbs_give_empty_list():
    hmtx = Hmtx(_hmtx_bytes(), num_glyphs=5, num_hmetrics=2)
    assert hmtx.lsbs() == []
    assert hmtx.hmetrics()[0].advance_width == _METRICS[0][0]


def test_tag_value():
    assert HMTX == make_tag("hmtx")