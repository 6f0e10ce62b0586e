"""
Profile Sequencer Tests

To run:
    pytest tests/render/controllers/test_profile_sequencer.py -v
"""

import pytest

from render.controllers.profile_sequencer import ProfileSequencer
from render.errors import EmptySequenceError, InvalidArgumentError


@pytest.mark.unit
def test_sequencer_drops_default_entry(sequencer):
    """Test entry 0 (system default) is not part of the cycle."""
    assert sequencer.get_count() == 3
    assert sequencer.get_names() == ["kemar.sofa", "fabian.sofa", "cipic_003.sofa"]
    assert sequencer.get_current_index() == 0
    assert sequencer.get_current_name() == "kemar.sofa"


@pytest.mark.unit
def test_sequencer_renderer_index_offset(sequencer):
    """Test renderer index skips the default entry."""
    assert sequencer.get_renderer_index() == 1

    sequencer.advance()
    assert sequencer.get_renderer_index() == 2


@pytest.mark.unit
def test_sequencer_without_default():
    """Test has_default=False keeps every entry."""
    sequencer = ProfileSequencer(["a", "b"], has_default=False)

    assert sequencer.get_count() == 2
    assert sequencer.get_current_name() == "a"
    assert sequencer.get_renderer_index() == 0


@pytest.mark.unit
def test_sequencer_advance_wraps(sequencer):
    """Test advance() cycles back to the first profile after the last."""
    assert sequencer.advance() == 1
    assert sequencer.advance() == 2
    assert sequencer.is_last() is True

    assert sequencer.advance() == 0
    assert sequencer.get_current_name() == "kemar.sofa"


@pytest.mark.unit
def test_sequencer_is_last(sequencer):
    assert sequencer.is_last() is False
    sequencer.advance()
    sequencer.advance()
    assert sequencer.is_last() is True


@pytest.mark.unit
def test_sequencer_single_profile_is_always_last():
    """Test a one-profile cycle is last from the start."""
    sequencer = ProfileSequencer(["Default", "only.sofa"])

    assert sequencer.is_last() is True
    assert sequencer.advance() == 0
    assert sequencer.is_last() is True


@pytest.mark.unit
def test_sequencer_reset(sequencer):
    sequencer.advance()
    sequencer.advance()

    sequencer.reset()

    assert sequencer.get_current_index() == 0


@pytest.mark.unit
@pytest.mark.parametrize("names", [[], ["Default"]])
def test_sequencer_rejects_empty_cycle(names):
    """Test construction fails when no custom profile remains."""
    with pytest.raises(EmptySequenceError):
        ProfileSequencer(names)


@pytest.mark.unit
def test_empty_sequence_is_invalid_argument():
    """Test EmptySequenceError can be caught as InvalidArgumentError."""
    with pytest.raises(InvalidArgumentError):
        ProfileSequencer([], has_default=False)


@pytest.mark.unit
def test_sequencer_names_are_a_copy(sequencer):
    """Test mutating the returned list does not affect the sequencer."""
    names = sequencer.get_names()
    names.clear()

    assert sequencer.get_count() == 3
