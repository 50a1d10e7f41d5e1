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
Unit tests for create specification cloning.
"""
import pytest
from edgeoverlay.MODELS.create_spec import CreateSpec
from edgeoverlay.OVERLAYS.spec_cloner import clone_create_spec


class TestCloneCreateSpec:
    """Tests for clone_create_spec."""

    def _spec(self):
        return CreateSpec.model_validate({
            "Env": ["A=1"],
            "Labels": {"tier": "edge"},
            "HostConfig": {"Binds": ["/data:/data"], "Privileged": True},
            "NetworkingConfig": {"EndpointsConfig": {"net": {"Aliases": ["x"]}}},
        })

    def test_clone_is_equal_but_distinct(self):
        """Test that the clone has the same value but different objects."""
        original = self._spec()
        clone = clone_create_spec(original)
        assert clone == original
        assert clone is not original
        assert clone.host_config is not original.host_config
        assert clone.host_config.binds is not original.host_config.binds

    def test_mutating_clone_leaves_original(self):
        """Test that overlay-style mutation of the clone does not leak."""
        original = self._spec()
        clone = clone_create_spec(original)
        clone.host_config.binds.append("/run:/run")
        clone.networking_config.endpoints_config["net"].aliases.append("y")
        clone.Env.append("B=2")

        assert original.host_config.binds == ["/data:/data"]
        assert original.networking_config.endpoints_config["net"].aliases == ["x"]
        assert original.Env == ["A=1"]

    def test_extra_fields_are_copied(self):
        """Test that fields not modelled explicitly survive cloning."""
        clone = clone_create_spec(self._spec())
        wire = clone.to_wire()
        assert wire["Labels"] == {"tier": "edge"}
        assert wire["HostConfig"]["Privileged"] is True

    def test_none_returns_new_empty_spec(self):
        """Test that a missing spec yields a fresh default."""
        first = clone_create_spec(None)
        second = clone_create_spec(None)
        assert first == CreateSpec()
        assert first is not second
        assert first.to_wire() == {}

    def test_wrong_type_raises(self):
        """Test that a non-spec value is rejected."""
        with pytest.raises(TypeError):
            clone_create_spec({"HostConfig": {}})
