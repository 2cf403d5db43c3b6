"""pytest configuration file."""

import pytest, os, logging

# Qt tests run headless
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "qt: marks tests that need a Qt event loop"
    )

@pytest.fixture(autouse=True, scope="session")
def _quiet_logs():
    os.environ.pop("PARALLAXANIMATOR_CYCLE_TRACE", None)
    logging.getLogger("parallaxanimator.scene.events").setLevel(logging.INFO)
    yield

@pytest.fixture
def make_state():
    """Build a CycleState straight from image names and a delay."""
    from parallaxanimator.content.notes import MapParallaxConfig
    from parallaxanimator.loom.cyclers import CycleState

    def _make(images, delay_frames=60):
        return CycleState(MapParallaxConfig(images=tuple(images), delay_frames=delay_frames))
    return _make
