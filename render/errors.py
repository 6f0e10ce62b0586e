"""
Render Errors

Exceptions raised by the session core. All of them are local and
synchronous: the call that raised left the session state unchanged.

Capture collaborator errors (CaptureError and friends) live next to the
capture interface in render/interfaces/audio_capture_interface.py.
"""


class RenderError(Exception):
    """Base class for render session errors"""
    pass


class InvalidArgumentError(RenderError, ValueError):
    """Non-positive duration, unknown render method, etc."""
    pass


class EmptySequenceError(InvalidArgumentError):
    """Profile sequencer built without any profile to cycle through"""
    pass


class AlreadyRenderingError(RenderError):
    """start_render() called while a session is running"""
    pass


class AlreadyRecordingError(RenderError):
    """Recording start requested while a capture is already active"""
    pass
