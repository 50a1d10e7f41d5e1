# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Unit tests for the configuration source and overlay settings.
"""
import pytest
from edgeoverlay.CONFIG.config_source import ConfigSource
from edgeoverlay.CONFIG.settings import OverlaySettings
from edgeoverlay.exceptions import ConfigurationError, MissingConfigurationError
from edgeoverlay.MODELS.module import Module
from edgeoverlay.UTILS.platform import BindPathPolicy, detect_bind_path_policy, is_windows_host


class TestConfigSource:
    """Tests for ConfigSource."""

    def test_precedence(self, tmp_path):
        """Test that later layers override earlier ones."""
        (tmp_path / "first.env").write_text("A=file1\nB=file1\nC=file1\n")
        (tmp_path / "second.env").write_text("B=file2\n")
        config = ConfigSource(
            defaults={"A": "default", "D": "default"},
            env_files=["first.env", "second.env"],
            environ={"C": "env"},
            overrides={"D": "override"},
            base_dir=str(tmp_path),
        )
        assert config.get_value("A") == "file1"
        assert config.get_value("B") == "file2"
        assert config.get_value("C") == "env"
        assert config.get_value("D") == "override"

    def test_missing_env_file_is_skipped(self, tmp_path):
        config = ConfigSource(env_files=["missing.env"], environ={}, base_dir=str(tmp_path))
        assert config.get_value("A") is None

    def test_quoted_env_values(self, tmp_path):
        """Test that .env quoting and comments are handled."""
        (tmp_path / ".env").write_text('# comment\nIOTEDGE_WORKLOADURI="unix:///run/iotedge/workload.sock"\n')
        config = ConfigSource(env_files=[".env"], environ={}, base_dir=str(tmp_path))
        assert config.get_value("IOTEDGE_WORKLOADURI") == "unix:///run/iotedge/workload.sock"

    def test_default_and_required(self):
        config = ConfigSource(environ={}, overrides={"A": "1"})
        assert config.get_value("B", "fallback") == "fallback"
        assert config.get_required("A") == "1"
        with pytest.raises(MissingConfigurationError) as info:
            config.get_required("B")
        assert info.value.key == "B"

    def test_interpolation(self):
        """Test that values are interpolated against the merged mapping."""
        config = ConfigSource(environ={"HOST": "edge1"}, overrides={
            "NAME": "${HOST}.local",
            "MISSING": "${NOPE}",
            "PRICE": "$$5",
        })
        assert config.get_value("NAME") == "edge1.local"
        assert config.get_value("MISSING") == ""
        assert config.get_value("PRICE") == "$5"


class TestOverlaySettings:
    """Tests for OverlaySettings."""

    def test_defaults(self):
        config = ConfigSource(environ={})
        settings = OverlaySettings.from_config(config, platform_name="linux")
        assert settings.edge_hub_module_name == "edgeHub"
        assert settings.edge_agent_module_name == "edgeAgent"
        assert settings.bind_path_policy == BindPathPolicy.SOCKET_FILE

    def test_windows_detection(self):
        config = ConfigSource(environ={})
        settings = OverlaySettings.from_config(config, platform_name="win32")
        assert settings.bind_path_policy == BindPathPolicy.PARENT_DIRECTORY

    def test_policy_override(self):
        config = ConfigSource(environ={}, overrides={"BindPathPolicy": " Parent-Directory "})
        settings = OverlaySettings.from_config(config, platform_name="linux")
        assert settings.bind_path_policy == BindPathPolicy.PARENT_DIRECTORY

    def test_invalid_policy(self):
        config = ConfigSource(environ={}, overrides={"BindPathPolicy": "sideways"})
        with pytest.raises(ConfigurationError):
            OverlaySettings.from_config(config)

    @pytest.mark.parametrize("blank", ["", "   "])
    def test_blank_reserved_names_use_defaults(self, blank):
        config = ConfigSource(environ={}, overrides={
            "EdgeHubModuleName": blank,
            "EdgeAgentModuleName": blank,
        })
        settings = OverlaySettings.from_config(config, platform_name="linux")
        assert settings.edge_hub_module_name == "edgeHub"
        assert settings.edge_agent_module_name == "edgeAgent"
        assert settings.is_edge_hub(Module(name="EDGEHUB", image="x"))

    def test_reserved_names_are_stripped(self):
        config = ConfigSource(environ={}, overrides={"EdgeHubModuleName": " hub "})
        settings = OverlaySettings.from_config(config, platform_name="linux")
        assert settings.is_edge_hub(Module(name="hub", image="x"))

    def test_reserved_names_case_insensitive(self):
        settings = OverlaySettings(edge_hub_module_name="hub", edge_agent_module_name="agent")
        assert settings.is_edge_hub(Module(name="HUB", image="x"))
        assert settings.is_edge_agent(Module(name="Agent", image="x"))
        assert not settings.is_edge_hub(Module(name="edgeHub", image="x"))


class TestPlatform:
    """Tests for platform detection."""

    @pytest.mark.parametrize("name,expected", [
        ("win32", True),
        ("cygwin", True),
        ("linux", False),
        ("darwin", False),
    ])
    def test_is_windows_host(self, name, expected):
        assert is_windows_host(name) is expected

    def test_detect_policy(self):
        assert detect_bind_path_policy("linux") == BindPathPolicy.SOCKET_FILE
        assert detect_bind_path_policy("win32") == BindPathPolicy.PARENT_DIRECTORY
