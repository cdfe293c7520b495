import pytest
import os
import sys

# Add the backend directory to the path so the modules import as they do at runtime
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../backend')))

from dsp.window_manager import WindowManager


@pytest.fixture
def hann_manager():
    """Hann window manager at 48 kHz, released after the test."""
    manager = WindowManager('h', 48000)
    yield manager
    manager.release()


@pytest.fixture
def counting_generator(monkeypatch):
    """Replace the Hann generator with one that records every call."""
    import dsp.window_manager as window_manager
    from dsp.windows import GENERATORS, WindowFamily

    calls = []
    original = GENERATORS[WindowFamily.HANN]

    def generator(n):
        calls.append(n)
        return original(n)

    patched = dict(GENERATORS)
    patched[WindowFamily.HANN] = generator
    monkeypatch.setattr(window_manager, 'GENERATORS', patched)
    return calls
