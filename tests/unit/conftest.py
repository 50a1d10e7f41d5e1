import pytest
from edgeoverlay.CONFIG.config_source import ConfigSource
from edgeoverlay.CONFIG.settings import OverlaySettings
from edgeoverlay.UTILS.platform import BindPathPolicy

WORKLOAD_SOCKET = "unix:///run/iotedge/workload.sock"
MANAGEMENT_SOCKET = "unix:///run/iotedge/mgmt.sock"


@pytest.fixture
def make_config():
    """Builds a ConfigSource isolated from the process environment."""
    def _make(**values):
        base = {
            "IOTEDGE_WORKLOADURI": WORKLOAD_SOCKET,
            "IOTEDGE_MANAGEMENTURI": MANAGEMENT_SOCKET,
        }
        base.update(values)
        return ConfigSource(environ={}, overrides={k: v for k, v in base.items() if v is not None})
    return _make


@pytest.fixture
def linux_settings():
    return OverlaySettings(bind_path_policy=BindPathPolicy.SOCKET_FILE)


@pytest.fixture
def windows_settings():
    return OverlaySettings(bind_path_policy=BindPathPolicy.PARENT_DIRECTORY)
