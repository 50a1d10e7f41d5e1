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
Parsers for deployment manifests (YAML or JSON).
"""
import logging
import os
import re
from typing import Dict, Any, Optional

import yaml
from pydantic import ValidationError

from ..exceptions import DeploymentParseError
from ..MODELS.module import DeploymentManifest, Module, RegistryCredential, RuntimeInfo
from ..UTILS.string_interpolation import EnvironmentInterpolator

logger = logging.getLogger(__name__)

# Long create options may be split over createOptions, createOptions01, createOptions02, ...
_CREATE_OPTIONS_CHUNK = re.compile(r'^createOptions(\d{2})$')

class DeploymentParser:
    """
    Parser for deployment manifests.
    """
    def __init__(self, context: Optional[Dict[str, str]] = None):
        """
        Initializes the parser with an optional context for interpolation.

        :param context: A dictionary of variables for interpolation.
        """
        self.context = context if context is not None else dict(os.environ)

    def parse(self, manifest_path: str) -> DeploymentManifest:
        """
        Parses a manifest from a path.

        :param manifest_path: Path to the manifest file.
        :return: Parsed manifest.
        """
        with open(manifest_path, 'r') as f:
            content = f.read()
        return self.parse_from_string(content)

    def parse_from_string(self, content: str) -> DeploymentManifest:
        """
        Parses a manifest from a string.

        :param content: YAML or JSON content of the manifest.
        :return: Parsed manifest.
        :raises DeploymentParseError: If the content is not a valid manifest.
        """
        try:
            content = EnvironmentInterpolator.interpolate(content, self.context)
        except KeyError as e:
            # Unset variables resolve to an empty string, as in compose files
            logger.warning("Unresolved variable in manifest: %s", e)
            content = EnvironmentInterpolator.interpolate(content, self.context, strict=False)

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise DeploymentParseError(f"Manifest is not valid YAML: {e}") from e
        if not data:
            data = {}
        if not isinstance(data, dict):
            raise DeploymentParseError("Manifest must be a mapping")

        modules: Dict[str, Module] = {}
        for section in ('systemModules', 'modules'):
            section_data = self._to_mapping(data.get(section), section)
            for name, spec in section_data.items():
                if name in modules:
                    raise DeploymentParseError(f"Module {name} is declared more than once")
                modules[name] = self._parse_module(name, spec)

        runtime = self._parse_runtime(self._to_mapping(data.get('runtime'), 'runtime'))
        return DeploymentManifest(runtime=runtime, modules=modules)

    def _parse_runtime(self, spec: Dict[str, Any]) -> RuntimeInfo:
        """
        Parses the runtime section, including registry credentials.
        """
        settings = self._to_mapping(spec.get('settings'), 'runtime.settings')
        registry_credentials = self._to_mapping(settings.get('registryCredentials'), 'registryCredentials')
        try:
            credentials = {
                name: RegistryCredential(**(cred or {}))
                for name, cred in registry_credentials.items()
            }
            return RuntimeInfo(type=spec.get('type', 'docker'), registry_credentials=credentials)
        except (TypeError, ValidationError) as e:
            raise DeploymentParseError(f"Invalid runtime settings: {e}") from e

    def _parse_module(self, name: str, spec: Dict[str, Any]) -> Module:
        """
        Parses a single module definition.

        :param name: The name of the module.
        :param spec: The module specification dictionary.
        :return: A Module instance.
        """
        spec = self._to_mapping(spec, f"module {name}")
        settings = self._to_mapping(spec.get('settings'), f"module {name} settings")
        try:
            return Module(
                name=name,
                type=spec.get('type', 'docker'),
                version=self._to_str(spec.get('version')),
                status=spec.get('status'),
                image=settings.get('image', ''),
                create_options=self._join_create_options(settings),
            )
        except ValidationError as e:
            raise DeploymentParseError(f"Invalid module {name}: {e}") from e

    def _join_create_options(self, settings: Dict[str, Any]) -> Any:
        """
        Returns createOptions, concatenating numbered string chunks when present.
        """
        create_options = settings.get('createOptions')
        chunks = []
        for key, value in settings.items():
            match = _CREATE_OPTIONS_CHUNK.match(key)
            if match:
                chunks.append((int(match.group(1)), value))
        chunks.sort(key=lambda chunk: chunk[0])
        if not chunks:
            return create_options
        if create_options is not None and not isinstance(create_options, str):
            raise DeploymentParseError("Chunked createOptions must be strings")
        return (create_options or '') + ''.join(str(value) for _, value in chunks)

    def _to_mapping(self, val: Any, what: str) -> Dict[str, Any]:
        """
        Helper to ensure a manifest section is a mapping; empty sections become {}.

        :raises DeploymentParseError: If the value is a scalar or a list.
        """
        if val is None:
            return {}
        if not isinstance(val, dict):
            raise DeploymentParseError(f"{what} must be a mapping, got {type(val).__name__}")
        return val

    def _to_str(self, val: Any) -> Optional[str]:
        """
        Helper for scalar fields YAML may have loaded as numbers.
        """
        if val is None:
            return None
        return str(val)
