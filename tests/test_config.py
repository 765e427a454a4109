import pytest

from preimage2d import (
    ArithmeticOverflowError,
    Int64Arithmetic,
    Preimage,
    PreimageConfig,
    get_preimage_config,
    set_preimage_config,
)


@pytest.fixture
def restore_config():
    saved = get_preimage_config()
    yield
    set_preimage_config(saved)


def test_default_config():
    config = get_preimage_config()

    assert config.arithmetic == "int"
    assert config.check_invariants is False


def test_get_returns_a_copy(restore_config):
    config = get_preimage_config()
    config.arithmetic = "int64"

    assert get_preimage_config().arithmetic == "int"


def test_global_config_selects_int64_arithmetic(restore_config):
    set_preimage_config(PreimageConfig(arithmetic="int64"))

    with pytest.raises(ArithmeticOverflowError):
        Preimage((2 ** 63, 0), (2 ** 63 - 1, 0))
    engine = Preimage((0, 0), (0, 1))
    assert isinstance(engine._predicate.arithmetic, Int64Arithmetic)


def test_explicit_config_wins_over_global(restore_config):
    set_preimage_config(PreimageConfig(arithmetic="int64"))

    engine = Preimage((2 ** 63, 0), (2 ** 63, 1), config=PreimageConfig())

    assert engine.inner_hull == ((2 ** 63, 0),)


def test_invalid_arithmetic_name_is_rejected(restore_config):
    with pytest.raises(ValueError):
        set_preimage_config(PreimageConfig(arithmetic="float"))
    assert get_preimage_config().arithmetic == "int"


def test_invariant_checking_accepts_digital_straight_segments():
    config = PreimageConfig(check_invariants=True)
    engine = Preimage((0, 0), (0, 1), config=config)

    for x in range(1, 12):
        y = (2 * x + 1) // 5
        assert engine.add_front((x, y), (x, y + 1))
    assert engine.size == 12
    assert engine.is_valid()


def test_explicit_config_is_copied_at_construction():
    config = PreimageConfig()
    engine = Preimage((0, 0), (0, 1), config=config)

    config.check_invariants = True
    config.arithmetic = "int64"

    assert engine._config.check_invariants is False
    assert engine._config.arithmetic == "int"
    assert engine.add_front((1, 0), (1, 1))
