import pytest

from springmotion import reduced_motion as rm


def test_default_state_false():
    assert rm.is_reduced_motion() is False


def test_toggle():
    rm.set_reduced_motion(True)
    assert rm.is_reduced_motion() is True
    rm.set_reduced_motion(False)
    assert rm.is_reduced_motion() is False


def test_context_manager_restores_state():
    with rm.temporarily_reduced_motion(True):
        assert rm.is_reduced_motion() is True
    assert rm.is_reduced_motion() is False

    rm.set_reduced_motion(True)
    with rm.temporarily_reduced_motion(False):
        assert rm.is_reduced_motion() is False
    assert rm.is_reduced_motion() is True


def test_context_manager_exception_safety():
    with pytest.raises(RuntimeError):
        with rm.temporarily_reduced_motion(True):
            raise RuntimeError("boom")
    assert rm.is_reduced_motion() is False
