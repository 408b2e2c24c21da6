import pytest

from uvkit.colors import Color
from uvkit.errors import InvalidArgument
from uvkit.uniforms import BasicMultiUniforms, MultiLayerUniforms, rgb


def test_palette_lookup():
    assert Color.fromValue(0xFF0000) is Color.RED
    assert Color.fromValue(0x123456) is None
    assert Color.PITCH_BLACK is Color.ABSOLUTE_BLACK
    assert Color.MENARDS_GREEN.hex() == '#009a3d'


def test_rgb():
    assert rgb(Color.PURE_WHITE) == (1.0, 1.0, 1.0)
    assert rgb(0x00FF00) == (0.0, 1.0, 0.0)
    with pytest.raises(InvalidArgument):
        rgb(-1)
    with pytest.raises(InvalidArgument):
        rgb('red')


def test_multi_layer_uniforms():
    u = MultiLayerUniforms(texture='wood', texture2='grain', repeatX=2, repeatY=4)
    d = u.asdict()
    assert d['texture'] == {'type': 't', 'value': 'wood'}
    assert d['texture2']['value'] == 'grain'
    assert d['color'] == {'type': 'c', 'value': (1.0, 1.0, 1.0)}
    assert d['repeatX'] == {'type': 'f', 'value': 2.0}
    assert d['repeatY']['value'] == 4.0
    assert d['uvMultiply'] == {'type': 'b', 'value': False}
    with pytest.raises(InvalidArgument):
        MultiLayerUniforms(repeatY=0).asdict()


def test_basic_multi_uniforms():
    u = BasicMultiUniforms(tOne='a', tSec='b', textureRepeat=3,
                           extra={'opacity': {'type': 'f', 'value': 0.5}})
    d = u.asdict()
    assert d['uvMultiply']['value'] is True
    assert d['textureRepeat']['value'] == 3.0
    assert d['opacity']['value'] == 0.5
    assert set(d) == {'tOne', 'tSec', 'uvMultiply', 'textureRepeat', 'opacity'}
    ## a zero repeat is only a problem when dividing
    BasicMultiUniforms(textureRepeat=0).asdict()
    with pytest.raises(InvalidArgument):
        BasicMultiUniforms(uvMultiply=False, textureRepeat=0).asdict()
